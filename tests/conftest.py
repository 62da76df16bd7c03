# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from passlib.context import CryptContext
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tests.helpers import ADMIN_PASSWORD, ADMIN_USERNAME, FakeClock

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ADMIN_USERNAME", ADMIN_USERNAME)
os.environ.setdefault(
    "ADMIN_PASSWORD_HASH",
    # Low cost keeps the many failed-login tests fast.
    CryptContext(schemes=["bcrypt"], bcrypt__rounds=4).hash(ADMIN_PASSWORD),
)

from technofest.core.settings import Settings, settings
from technofest.db.session import Base
from technofest.db.session import get_db as app_get_session
from technofest.main import app as fastapi_app
from technofest.services.authenticator import AdminAuthenticator, build_authenticator
from technofest.services.rate_limit import RateLimiter
from technofest.services.registration import RegistrationService

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def test_settings() -> Settings:
    """Settings instance the application was started with."""
    return settings


@pytest.fixture(autouse=True)
def fresh_app_state(app: FastAPI, clock: FakeClock, test_settings: Settings) -> Iterator[None]:
    """Give every test its own throttle, sessions, and rate limiter on a fake clock."""
    saved = (
        app.state.authenticator,
        app.state.registration_limiter,
        app.state.registration_service,
    )
    app.state.authenticator = build_authenticator(test_settings, clock=clock)
    app.state.registration_limiter = RateLimiter(
        max_requests=test_settings.register_rate_limit,
        window_seconds=test_settings.register_rate_window_minutes * 60,
        clock=clock,
    )
    app.state.registration_service = RegistrationService(
        max_upload_bytes=test_settings.max_upload_bytes,
        max_total_upload_bytes=test_settings.max_total_upload_bytes,
    )
    try:
        yield
    finally:
        (
            app.state.authenticator,
            app.state.registration_limiter,
            app.state.registration_service,
        ) = saved


@pytest.fixture()
def authenticator(app: FastAPI, fresh_app_state: None) -> AdminAuthenticator:
    """The authenticator currently serving requests."""
    return app.state.authenticator


@pytest.fixture()
def token_authenticator(
    app: FastAPI,
    clock: FakeClock,
    test_settings: Settings,
    fresh_app_state: None,
) -> AdminAuthenticator:
    """Switch the application to signed-token credentials for this test."""
    token_settings = test_settings.model_copy(update={"credential_strategy": "token"})
    app.state.authenticator = build_authenticator(token_settings, clock=clock)
    return app.state.authenticator


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin_client(client: TestClient) -> TestClient:
    """A client holding a valid admin credential cookie."""
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return client
