"""Shared fixtures: a fresh app and SQLite file per test."""

import pytest

from app import create_app
from models import db
from security.credentials import create_user
from tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD, USER_EMAIL, USER_PASSWORD


@pytest.fixture
def app(tmp_path):
    app = create_app(overrides={
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "test.db"),
        "SECRET_KEY": "test-session-secret",
        "JWT_SECRET": "test-jwt-secret",
        "BCRYPT_ROUNDS": 4,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Creates an account and returns its id."""

    def _make(username="alice", email=USER_EMAIL, password=USER_PASSWORD, is_admin=False):
        with app.app_context():
            return create_user(username, email, password, is_admin=is_admin).id

    return _make


@pytest.fixture
def admin_id(make_user):
    return make_user("admin", ADMIN_EMAIL, ADMIN_PASSWORD, is_admin=True)


@pytest.fixture
def user_id(make_user, admin_id):  # noqa: ARG001 - installation needs an admin first
    return make_user()


@pytest.fixture
def login(client):
    def _login(email, password, c=None):
        return (c or client).post("/login", json={"email": email, "password": password})

    return _login


@pytest.fixture
def admin_client(client, admin_id, login):  # noqa: ARG001
    resp = login(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert resp.status_code == 200
    return client


@pytest.fixture
def user_client(app, user_id, login):  # noqa: ARG001
    c = app.test_client()
    resp = login(USER_EMAIL, USER_PASSWORD, c)
    assert resp.status_code == 200
    return c


@pytest.fixture
def fake_clock(app):
    """Replaces the throttle clock; advance with clock.now += seconds."""

    class _Clock:
        now = 1_000_000.0

        def __call__(self):
            return self.now

    clock = _Clock()
    app.extensions["attempt_throttle"].clock = clock
    return clock

