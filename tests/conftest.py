import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from calorics.db.session import enable_sqlite_foreign_keys, init_db
from calorics.deps import get_db
from calorics.main import app
from calorics.services.catalog import seed_catalog

CATALOG_CSV = """name,id,calories,fat,carbs,protein,fiber
Apple,1,0.52,0.002,0.14,0.003,0.024
Chicken Breast,2,2.0,0.036,0,0.31,0
Olive Oil,3,8.84,1.0,0,0,0
Boiled Egg,4,1.55,0.11,0.011,0.13,0
Egg White,10,0.52,0.002,0.007,0.11,0
White Bread,5,2.65,0.032,0.49,0.09,0.027
Brown Rice,6,1.11,0.009,0.23,0.026,0.018
deprecated,7,1.0,0,0,0,0
Broken Row,8,1.0
Mystery Stew,9,n/a,0.05,0.1,0.08,0
"""


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def catalog_csv(tmp_path):
    path = tmp_path / "dataset.csv"
    path.write_text(CATALOG_CSV, encoding="utf-8")
    return path


@pytest.fixture
def seeded(db_session, catalog_csv):
    seed_catalog(db_session, catalog_csv)
    return db_session


@pytest.fixture
def client(session_factory, seeded):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def register_and_login(client, email="a@x", password="p", **extra):
    payload = {
        "name": "A",
        "email": email,
        "password": password,
        "gender": "male",
        "birthday": "1990-01-01",
    }
    payload.update(extra)
    resp = client.post("/api/register", json=payload)
    assert resp.status_code == 200, resp.text

    resp = client.post("/api/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


@pytest.fixture
def foods(client, auth_headers):
    resp = client.get("/api/foods", headers=auth_headers)
    assert resp.status_code == 200
    return {food["name"]: food for food in resp.json()}
