import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["AUTO_CREATE_TABLES"] = "false"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hydro.core.security import create_access_token, hash_password
from hydro.database import Base, get_db
from hydro.main import app
from hydro.models import (
    AuthorizationType,
    BasinSection,
    Category,
    Corporation,
    Department,
    DischargeUser,
    EconomicActivity,
    Municipality,
    User,
    UserRole,
    WaterBasin,
)

PASSWORD = "Secret123"


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, corporation, email, role=UserRole.ADMIN):
    user = User(
        corporation_id=corporation.id,
        full_name=f"{role.value.title()} User",
        email=email,
        password_hash=hash_password(PASSWORD),
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    return user


def auth_headers_for(user):
    token = create_access_token({
        "user_id": user.id,
        "corporation_id": user.corporation_id,
        "role": user.role.value,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def corporation(db_session):
    corporation = Corporation(name="Rio Claro Water Authority", code="RCWA", is_active=True)
    db_session.add(corporation)
    db_session.commit()
    return corporation


@pytest.fixture()
def other_corporation(db_session):
    corporation = Corporation(name="Valle Alto Water Authority", code="VAWA", is_active=True)
    db_session.add(corporation)
    db_session.commit()
    return corporation


@pytest.fixture()
def admin_user(db_session, corporation):
    return make_user(db_session, corporation, "admin@rioclaro.co")


@pytest.fixture()
def auth_headers(admin_user):
    return auth_headers_for(admin_user)


@pytest.fixture()
def master_headers(db_session, corporation):
    return auth_headers_for(make_user(db_session, corporation, "master@rioclaro.co", UserRole.MASTER))


@pytest.fixture()
def viewer_headers(db_session, corporation):
    return auth_headers_for(make_user(db_session, corporation, "viewer@rioclaro.co", UserRole.VIEWER))


@pytest.fixture()
def other_headers(db_session, other_corporation):
    return auth_headers_for(make_user(db_session, other_corporation, "admin@vallealto.co"))


@pytest.fixture()
def reference(db_session, corporation):
    """Geography, catalogs, a basin section and a discharge user of the corporation"""
    department = Department(name="Antioquia", code="05")
    category = Category(name="Third", value=Decimal("2.12"))
    activity = EconomicActivity(name="Dairy products", code="1040", is_active=True)
    authorization = AuthorizationType(name="Discharge permit", is_active=True)
    db_session.add_all([department, category, activity, authorization])
    db_session.flush()

    municipality = Municipality(
        name="Rionegro",
        code="615",
        department_id=department.id,
        category_id=category.id,
        nbi=Decimal("35.40"),
        is_active=True,
    )
    basin = WaterBasin(corporation_id=corporation.id, name="Rio Negro", is_active=True)
    db_session.add_all([municipality, basin])
    db_session.flush()

    section = BasinSection(
        corporation_id=corporation.id,
        water_basin_id=basin.id,
        name="Upper stretch",
        start_point="Source",
        end_point="Bridge",
        is_active=True,
    )
    discharge_user = DischargeUser(
        corporation_id=corporation.id,
        company_name="Lacteos del Oriente",
        code="LDO01",
        document_number="900123456",
        municipality_id=municipality.id,
        economic_activity_id=activity.id,
        authorization_type_id=authorization.id,
        is_active=True,
    )
    db_session.add_all([section, discharge_user])
    db_session.commit()

    return {
        "department_id": department.id,
        "category_id": category.id,
        "municipality_id": municipality.id,
        "economic_activity_id": activity.id,
        "authorization_type_id": authorization.id,
        "water_basin_id": basin.id,
        "basin_section_id": section.id,
        "discharge_user_id": discharge_user.id,
    }


@pytest.fixture()
def discharge_payload(reference):
    """Two declared months, one intake month and one classified monitoring"""
    return {
        "discharge_user_id": reference["discharge_user_id"],
        "basin_section_id": reference["basin_section_id"],
        "municipality_id": reference["municipality_id"],
        "discharge_type": "NON_DOMESTIC",
        "year": 2025,
        "name": "Plant outfall",
        "discharge_point": "Km 3",
        "dqo": "500",
        "parameters": [
            {"month": 1, "caudal_volumen": "10", "frequency": "30", "duration": "24",
             "conc_dbo": "100", "conc_sst": "50"},
            {"month": 2, "caudal_volumen": "30", "frequency": "28", "duration": "24",
             "conc_dbo": "200", "conc_sst": "80"},
            {"month": 1, "origin": "INTAKE", "caudal_volumen": "5", "frequency": "30", "duration": "24",
             "conc_dbo": "10", "conc_sst": "5"},
        ],
        "monitorings": [
            {"monitoring_station": "EST-01", "od": "80", "sst": "100", "dqo": "30",
             "ce": "100", "ph": "7.5", "caudal_volumen": "100"},
        ],
    }
