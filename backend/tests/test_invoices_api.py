from decimal import Decimal

import pytest

from hydro.models import Category, DischargeUser, Invoice, MinimumTariff, Municipality, ProjectProgress

API = "/api/v1/invoices"


@pytest.fixture()
def tariff(db_session, corporation):
    tariff = MinimumTariff(
        corporation_id=corporation.id,
        year=2025,
        dbo_value=Decimal("150.5"),
        sst_value=Decimal("64.3"),
        is_active=True,
    )
    db_session.add(tariff)
    db_session.commit()
    return tariff


@pytest.fixture()
def discharge(client, auth_headers, discharge_payload):
    response = client.post("/api/v1/discharges/", json=discharge_payload, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


def _generate(client, headers, discharge_id):
    return client.post(f"{API}/generate-from-discharge/{discharge_id}", headers=headers)


def test_generate_invoice(client, auth_headers, tariff, discharge):
    response = _generate(client, auth_headers, discharge["id"])

    assert response.status_code == 201
    data = response.json()
    assert data["number"] == 1
    assert data["reference"] == "FAC-2025-00001"
    assert data["is_active"] is True
    assert data["number_ica_variables"] == 5
    assert Decimal(data["regional_factor"]) == Decimal("2.985")
    assert Decimal(data["total_amount_to_pay"]) == (
        Decimal(data["amount_to_pay_dbo"]) + Decimal(data["amount_to_pay_sst"])
    )


def test_regenerate_same_amount_returns_active_invoice(client, db_session, auth_headers, tariff, discharge):
    first = _generate(client, auth_headers, discharge["id"]).json()

    response = _generate(client, auth_headers, discharge["id"])

    assert response.status_code == 200
    assert response.json()["id"] == first["id"]
    assert response.json()["number"] == 1
    assert db_session.query(Invoice).count() == 1


def test_regenerate_changed_amount_replaces_invoice(client, db_session, auth_headers, tariff, discharge):
    first = _generate(client, auth_headers, discharge["id"]).json()
    client.put(
        f"/api/v1/discharges/{discharge['id']}",
        json={"parameters": [
            {"month": 1, "caudal_volumen": "10", "frequency": "30", "duration": "24",
             "conc_dbo": "100", "conc_sst": "50"},
        ]},
        headers=auth_headers,
    )

    response = _generate(client, auth_headers, discharge["id"])

    assert response.status_code == 201
    assert response.json()["number"] == 2
    history = client.get(f"{API}/by-discharge/{discharge['id']}", headers=auth_headers).json()
    assert [(item["number"], item["is_active"]) for item in history] == [(2, True), (1, False)]
    assert history[1]["id"] == first["id"]


def test_generate_without_tariff(client, auth_headers, discharge):
    response = _generate(client, auth_headers, discharge["id"])

    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


def test_generate_without_monitoring(client, auth_headers, tariff, discharge_payload):
    payload = dict(discharge_payload, monitorings=[])
    created = client.post("/api/v1/discharges/", json=payload, headers=auth_headers).json()

    response = _generate(client, auth_headers, created["id"])

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_DATA"


def test_generate_for_other_corporation_discharge(client, other_headers, tariff, discharge):
    assert _generate(client, other_headers, discharge["id"]).status_code == 404


def test_public_service_company_progress_lowers_factor(client, db_session, auth_headers, tariff, discharge,
                                                      corporation, reference):
    discharge_user = db_session.get(DischargeUser, reference["discharge_user_id"])
    discharge_user.is_public_service_company = True
    db_session.add(ProjectProgress(
        corporation_id=corporation.id,
        discharge_user_id=discharge_user.id,
        year=2025,
        cci_percentage=Decimal("50"),
        cev_percentage=Decimal("85"),
        cds_percentage=Decimal("10"),
        ccs_percentage=Decimal("30"),
    ))
    db_session.commit()

    data = _generate(client, auth_headers, discharge["id"]).json()

    assert Decimal(data["economic_variable"]) == Decimal("0.475")
    assert Decimal(data["regional_factor"]) == Decimal("2.51")


def test_list_and_stats(client, auth_headers, tariff, discharge):
    invoice = _generate(client, auth_headers, discharge["id"]).json()

    listed = client.get(f"{API}/", params={"year": 2025}, headers=auth_headers).json()
    stats = client.get(f"{API}/stats", headers=auth_headers).json()

    assert listed["total"] == 1
    assert listed["items"][0]["id"] == invoice["id"]
    assert stats["total_invoices"] == 1
    assert Decimal(stats["total_amount"]) == Decimal(invoice["total_amount_to_pay"])


def test_tariff_cannot_be_deleted_once_invoiced(client, auth_headers, tariff, discharge):
    _generate(client, auth_headers, discharge["id"])

    response = client.delete(f"/api/v1/minimum-tariffs/{tariff.id}", headers=auth_headers)

    assert response.status_code == 409


def test_invoiced_discharge_cannot_be_deleted(client, auth_headers, tariff, discharge):
    _generate(client, auth_headers, discharge["id"])

    response = client.delete(f"/api/v1/discharges/{discharge['id']}", headers=auth_headers)

    assert response.status_code == 409


def test_factor_uses_municipality_of_discharge_user(client, db_session, auth_headers, tariff, discharge_payload,
                                                    reference):
    poorer_category = Category(name="Sixth", value=Decimal("5.50"))
    db_session.add(poorer_category)
    db_session.flush()
    discharge_point = Municipality(
        name="Guatape",
        code="321",
        department_id=reference["department_id"],
        category_id=poorer_category.id,
        nbi=Decimal("85.00"),
        is_active=True,
    )
    db_session.add(discharge_point)
    db_session.commit()

    created = client.post(
        "/api/v1/discharges/",
        json=dict(discharge_payload, municipality_id=discharge_point.id),
        headers=auth_headers,
    ).json()

    data = _generate(client, auth_headers, created["id"]).json()

    # Rionegro (NBI 35.40, category 2.12) of the discharge user, not Guatape
    assert Decimal(data["socioeconomic_variable"]) == Decimal("0.649")
    assert Decimal(data["regional_factor"]) == Decimal("2.985")
