from conftest import PASSWORD, auth_headers_for

API = "/api/v1"

REGISTRATION = {
    "corporation_name": "Sierra Nevada Water Authority",
    "corporation_code": "SNWA",
    "admin_full_name": "Ana Torres",
    "admin_email": "ana@sierranevada.co",
    "admin_password": "Strong123",
}


def test_register_creates_corporation_and_admin(client):
    response = client.post(f"{API}/auth/register", json=REGISTRATION)

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "ADMIN"
    assert data["corporation"]["code"] == "SNWA"

    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "ana@sierranevada.co"


def test_register_rejects_duplicates(client):
    assert client.post(f"{API}/auth/register", json=REGISTRATION).status_code == 201

    response = client.post(f"{API}/auth/register", json=dict(REGISTRATION, corporation_code="OTHER"))

    assert response.status_code == 400


def test_register_rejects_weak_password(client):
    response = client.post(f"{API}/auth/register", json=dict(REGISTRATION, admin_password="weakpass"))

    assert response.status_code == 422


def test_login(client, admin_user):
    response = client.post(f"{API}/auth/login", json={"email": admin_user.email, "password": PASSWORD})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == admin_user.id


def test_login_wrong_password(client, admin_user):
    response = client.post(f"{API}/auth/login", json={"email": admin_user.email, "password": "Wrong1234"})

    assert response.status_code == 401


def test_login_inactive_corporation(client, db_session, admin_user, corporation):
    corporation.is_active = False
    db_session.commit()

    response = client.post(f"{API}/auth/login", json={"email": admin_user.email, "password": PASSWORD})

    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_health_is_public(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_admin_creates_user_in_own_corporation(client, auth_headers, corporation):
    response = client.post(
        f"{API}/users/",
        json={"full_name": "Luis Gomez", "email": "luis@rioclaro.co", "role": "OPERATOR", "password": "Operator1"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["corporation_id"] == corporation.id

    listed = client.get(f"{API}/users/", headers=auth_headers).json()
    assert {user["email"] for user in listed["items"]} == {"admin@rioclaro.co", "luis@rioclaro.co"}


def test_master_role_cannot_be_assigned(client, auth_headers):
    response = client.post(
        f"{API}/users/",
        json={"full_name": "Eve Master", "email": "eve@rioclaro.co", "role": "MASTER", "password": "Master123"},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_deactivated_user_loses_access(client, db_session, auth_headers, corporation):
    from conftest import make_user
    from hydro.models import UserRole

    operator = make_user(db_session, corporation, "op@rioclaro.co", UserRole.OPERATOR)

    assert client.post(f"{API}/users/{operator.id}/deactivate", headers=auth_headers).status_code == 200

    response = client.get(f"{API}/auth/me", headers=auth_headers_for(operator))
    assert response.status_code == 404


def test_corporation_stats(client, auth_headers):
    response = client.get(f"{API}/corporations/me/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["users"] == 1
