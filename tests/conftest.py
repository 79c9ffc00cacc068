import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RX_PDF_ARCHIVE", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rxmanager import models  # noqa: F401
from rxmanager.api.deps import get_db
from rxmanager.db.base import Base
from rxmanager.main import app


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False,
                        autoflush=False,
                        bind=engine,
                        future=True)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def client(session_factory):

    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_medicine(client):

    def _make(name="Paracetamol",
              dosage="500 mg",
              type="tablet",
              manufacturer="GSK"):
        r = client.post("/api/medicines",
                        json={
                            "name": name,
                            "dosage": dosage,
                            "type": type,
                            "manufacturer": manufacturer,
                        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make
