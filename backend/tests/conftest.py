import os

ADMIN_PASSWORD = "letmein"
os.environ["ADMIN_PASSWORD"] = ADMIN_PASSWORD

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tripsplit.database import Base, get_db
from tripsplit.main import app
from tripsplit.services.roster_cache import roster_cache

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    roster_cache.clear()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}


@pytest.fixture
def trip(client):
    res = client.post("/api/trips", json={"name": "Da Lat"})
    return res.json()["id"]


@pytest.fixture
def add_expense(client, trip):
    def _add(payer, amount, title="Dinner", date="2024-05-01"):
        res = client.post(f"/api/trips/{trip}/expenses", json={
            "payer": payer, "title": title, "amount": amount, "date": date
        })
        assert res.status_code == 200
        return res.json()
    return _add
