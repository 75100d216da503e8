"""Pytest fixtures: transactional database, fake Redis and HTTP client.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases, and against a
fresh in-memory Redis double standing in for the credential store.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from ecommerce.core.config import TestingConfig
from ecommerce.core.extensions import REDIS_EXTENSION_KEY
from ecommerce.core.extensions import db as _db  # Flask-SQLAlchemy instance
from ecommerce.factory import create_app  # application factory under test


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Leaves ``REDIS_URL`` unset; :func:`redis_client` installs a fake.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    The application context pushed here stays active for the whole session.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one. Service-level ``commit()``
    calls therefore only release savepoints.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(autouse=True)
def redis_client(app):
    """Install an empty in-memory Redis as the app's credential store."""
    client = fakeredis.FakeRedis(decode_responses=True)
    app.extensions[REDIS_EXTENSION_KEY] = client
    try:
        yield client
    finally:
        client.flushall()
        app.extensions.pop(REDIS_EXTENSION_KEY, None)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def token_service(app, db):
    """Token service wired exactly as the request gate wires it."""
    from ecommerce.core.security import get_token_service

    return get_token_service()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
