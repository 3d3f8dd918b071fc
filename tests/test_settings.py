from models.user import User
from tests.helpers import USER_EMAIL, USER_PASSWORD


def test_profile_requires_login(client, admin_id):  # noqa: ARG001
    assert client.get("/settings").headers["Location"].endswith("/login")


def test_profile(user_client):
    body = user_client.get("/settings").get_json()
    assert body["user"]["email"] == USER_EMAIL
    assert "password_hash" not in body["user"]


def test_check_username(user_client):
    assert user_client.post("/settings/check-username", json={"username": "alice"}).get_json()["success"]
    assert user_client.post("/settings/check-username", json={"username": "fresh"}).get_json()["success"]

    taken = user_client.post("/settings/check-username", json={"username": "admin"})
    assert taken.status_code == 400


def test_update_username(app, user_client, user_id):
    resp = user_client.post("/settings/update-username", json={"username": "alicia"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/settings")
    with app.app_context():
        assert User.query.get(user_id).username == "alicia"

    # renaming leaves the session valid
    assert user_client.get("/settings").status_code == 200


def test_update_username_conflict(app, user_client, user_id):
    resp = user_client.post("/settings/update-username", json={"username": "admin"})
    assert resp.status_code == 400
    with app.app_context():
        assert User.query.get(user_id).username == "alice"


def test_update_password_requires_current_password(user_client):
    resp = user_client.post("/settings/update-password", json={
        "currentPassword": "wrong",
        "newPassword": "brand-new-secret",
    })
    assert resp.status_code == 400


def test_update_password_rejects_short_password(user_client):
    resp = user_client.post("/settings/update-password", json={
        "currentPassword": USER_PASSWORD,
        "newPassword": "abc",
    })
    assert resp.status_code == 400


def test_update_password_revokes_own_session(app, user_client, login):
    resp = user_client.post("/settings/update-password", json={
        "currentPassword": USER_PASSWORD,
        "newPassword": "brand-new-secret",
    })
    assert resp.status_code == 200

    assert user_client.get("/settings").headers["Location"].endswith("/login")
    assert login(USER_EMAIL, USER_PASSWORD, app.test_client()).status_code == 400
    assert login(USER_EMAIL, "brand-new-secret", app.test_client()).status_code == 200


def test_update_theme(app, user_client, user_id):
    assert user_client.post("/settings/update-theme", json={"theme": "light"}).status_code == 200
    assert user_client.post("/settings/update-theme", json={"theme": "neon"}).status_code == 400
    with app.app_context():
        assert User.query.get(user_id).theme == "light"


def test_update_language_changes_messages(app, user_client, user_id):
    resp = user_client.post("/settings/update-language", json={"language": "en"})
    assert resp.status_code == 302
    with app.app_context():
        assert User.query.get(user_id).language == "en"

    bad = user_client.post("/settings/update-theme", json={"theme": "neon"})
    assert bad.get_json()["message"] == "Unknown theme."


def test_update_password_rejects_password_longer_than_bcrypt_accepts(app, user_client, user_id):
    resp = user_client.post("/settings/update-password", json={
        "currentPassword": USER_PASSWORD,
        "newPassword": "é" * 40,
    })
    assert resp.status_code == 400
    with app.app_context():
        assert User.query.get(user_id).email == USER_EMAIL
    assert user_client.get("/settings").status_code == 200


def test_update_password_with_non_string_current_password(user_client):
    resp = user_client.post("/settings/update-password", json={
        "currentPassword": 12345,
        "newPassword": "brand-new-secret",
    })
    assert resp.status_code == 400
