import json

from models.user import User
from tests.helpers import USER_EMAIL


def test_make_admin_grants_flag(app, user_id):
    result = app.test_cli_runner().invoke(args=["make-admin", "Alice@Example.com"])
    assert result.exit_code == 0
    assert "is an administrator" in result.output
    with app.app_context():
        assert User.query.get(user_id).is_admin is True


def test_make_admin_unknown_email(app, admin_id):  # noqa: ARG001
    result = app.test_cli_runner().invoke(args=["make-admin", "ghost@example.com"])
    assert "User not found" in result.output


def test_export_backup_writes_document(app, user_id, tmp_path):  # noqa: ARG001
    target = tmp_path / "backup.json"
    result = app.test_cli_runner().invoke(args=["export-backup", str(target)])
    assert result.exit_code == 0

    doc = json.loads(target.read_text(encoding="utf-8"))
    assert {u["email"] for u in doc["users"]} == {"admin@example.com", USER_EMAIL}
    assert doc["metadata"]["version"] == "1.0.0"
