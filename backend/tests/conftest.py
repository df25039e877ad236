import os
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef")
os.environ.setdefault("POLKA_KEY", "f271c81ff7084ee5b99a5091b42d486e")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chirpy import models  # noqa: F401
from chirpy.api import admin, auth, chirps, deps, users, webhooks
from chirpy.api.errors import register_error_handlers
from chirpy.database import Base
from chirpy.services.metrics import HitCounter
from chirpy.services.store import ChirpyStore

SECRET_KEY = os.environ["SECRET_KEY"]
POLKA_KEY = os.environ["POLKA_KEY"]


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    db = session_factory()
    try:
        yield ChirpyStore(db)
    finally:
        db.close()


@pytest.fixture
def app(session_factory):
    app = FastAPI()
    app.state.hit_counter = HitCounter()
    register_error_handlers(app)
    for router in (users.router, auth.router, chirps.router, webhooks.router):
        app.include_router(router, prefix="/api")
    app.include_router(admin.router)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, email: str, password: str = "TestPass123!") -> dict:
    register_response = client.post("/api/users", json={"email": email, "password": password})
    assert register_response.status_code == 201

    login_response = client.post("/api/login", json={"email": email, "password": password})
    assert login_response.status_code == 200
    return login_response.json()
