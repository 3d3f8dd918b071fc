from sqlalchemy.exc import OperationalError

from models.user import User
from tests.helpers import ADMIN_EMAIL


def test_fresh_install_redirects_everything_to_setup(client):
    for path in ("/", "/admin", "/settings", "/logout"):
        resp = client.get(path)
        assert resp.status_code == 302, path
        assert resp.headers["Location"].endswith("/setup")


def test_exempt_paths_are_reachable_before_install(client):
    assert client.get("/setup").status_code == 200
    assert client.get("/login").status_code == 200
    assert client.get("/health").status_code == 200


def test_setup_creates_admin_and_logs_in(app, client):
    resp = client.post("/setup", json={
        "username": "root",
        "email": ADMIN_EMAIL,
        "password": "first-secret",
    })
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")

    with app.app_context():
        admin = User.query.filter_by(email=ADMIN_EMAIL).one()
        assert admin.is_admin is True

    # the cookie set by setup is honoured straight away
    assert client.get("/admin").status_code == 200


def test_setup_rejects_invalid_input(app, client):
    resp = client.post("/setup", json={"username": "", "email": "nope", "password": "x"})
    assert resp.status_code == 400
    assert len(resp.get_json()["details"]) == 3
    with app.app_context():
        assert User.query.count() == 0


def test_setup_cannot_run_twice(app, client, admin_id):  # noqa: ARG001
    resp = client.post("/setup", json={
        "username": "intruder",
        "email": "intruder@example.com",
        "password": "intruder-secret",
    })
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    with app.app_context():
        assert User.query.count() == 1
        assert User.query.filter_by(username="intruder").first() is None

    page = client.get("/setup")
    assert page.status_code == 302
    assert page.headers["Location"].endswith("/login")


def test_installed_app_sends_anonymous_to_login(client, admin_id):  # noqa: ARG001
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_setup_rejects_password_longer_than_bcrypt_accepts(app, client):
    resp = client.post("/setup", json={
        "username": "root",
        "email": ADMIN_EMAIL,
        "password": "x" * 80,
    })
    assert resp.status_code == 400
    with app.app_context():
        assert User.query.count() == 0


def test_setup_accepts_password_at_the_byte_limit(app, client):
    resp = client.post("/setup", json={
        "username": "root",
        "email": ADMIN_EMAIL,
        "password": "x" * 72,
    })
    assert resp.status_code == 302
    with app.app_context():
        assert User.query.count() == 1


def test_count_failure_lets_request_through(client, monkeypatch):
    def boom():
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr("security.installation.count_users", boom)
    # uninstalled, "/" would go to setup; a failed check lets the view decide
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
