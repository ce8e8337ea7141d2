from fastapi.testclient import TestClient
from sqlalchemy import inspect

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app

client = TestClient(app)


def test_read_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"app": "Ledger Desk backend", "status": "ok"}


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_startup_creates_tables():
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as started:
        assert inspect(engine).has_table("invoices")
        assert inspect(engine).has_table("accounts")
        assert started.get("/health").status_code == 200
