"""
Shared pytest fixtures for the MiniBank test suite.

Each test gets its own temporary SQLite database, so tests never touch the
development database and never see each other's rows. bcrypt runs at its
minimum cost factor to keep the suite fast.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "minibank-test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from minibank.database import Base, get_db
from minibank.main import app
from minibank.models import User, Account, Transaction  # noqa: F401
from minibank.services import auth as auth_service
from minibank.stores.credentials import CredentialStore
from minibank.stores.ledger import LedgerStore


@pytest.fixture
def test_engine(tmp_path):
    """Create a temporary SQLite database for one test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'minibank_test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    """Direct SQLAlchemy session for service and store tests."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def credentials(db):
    return CredentialStore(db)


@pytest.fixture
def ledger(db):
    return LedgerStore(db)


@pytest.fixture
def alice(credentials):
    """A registered user: (token, user)."""
    return auth_service.register(credentials, "alice", "a@x.com", "pw1")


@pytest.fixture
def bob(credentials):
    return auth_service.register(credentials, "bob", "b@x.com", "pw2")


@pytest.fixture
def client(session_factory):
    """TestClient whose GraphQL context uses the temporary database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def gql(client):
    """
    POST a GraphQL document to /graphql and return the decoded body.
    Pass token=... to send it as a bearer token.
    """

    def _run(query, variables=None, token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _run
