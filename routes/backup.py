"""
Backup and restore.

GET /backup/export is admin-only. POST /backup/import stays reachable
while the installation has no accounts, so a fresh deployment can be
restored from a known-good backup; once an account exists it is
admin-only. Import is destructive and is not safe to retry blindly: run
it during a maintenance window.
"""
import json
import logging

from flask import Blueprint, Response, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from security.errors import BackupFormatInvalid
from security.rbac import require_admin, require_admin_once_installed
from security.session import clear_session_cookie
from utils.backup import backup_filename, export_snapshot, import_snapshot, parse_backup_payload
from utils.i18n import translate

logger = logging.getLogger(__name__)

backup_bp = Blueprint("backup", __name__, url_prefix="/backup")


@backup_bp.get("/export")
@require_admin
def export_backup():
    data = export_snapshot()
    logger.info(
        "Backup exported: %s users, %s albums, %s logs",
        len(data["users"]), len(data["albums"]), len(data["logs"]),
    )
    return Response(
        json.dumps(data, indent=2, ensure_ascii=False),
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={backup_filename()}"},
    )


@backup_bp.post("/import")
@require_admin_once_installed
def import_backup():
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()

    try:
        data = parse_backup_payload(payload)
        import_snapshot(data)
    except BackupFormatInvalid as exc:
        logger.warning("Rejected backup import: %s", exc)
        return jsonify(error=translate("errors.invalid_backup")), 400
    except SQLAlchemyError:
        logger.exception("Backup import failed")
        return jsonify(error=translate("errors.import_failed")), 500

    # every session must re-authenticate against the restored accounts
    resp = jsonify(success=True)
    clear_session_cookie(resp)
    return resp, 200
