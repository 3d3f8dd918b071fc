"""
Whole-installation backup and restore.

An export is one JSON document holding every user (password hashes
included, so restored accounts can still log in), every album and every
login log, plus a metadata block. Import wipes the three tables and
reloads them from such a document, preserving ids.
"""
import json
import logging
from datetime import datetime

from flask import current_app
from sqlalchemy import Boolean, DateTime, Integer, String

from models import db
from models.album import Album
from models.login_log import LoginLog
from models.user import User
from security.errors import BackupFormatInvalid

logger = logging.getLogger(__name__)

# key in the document -> model; insert order, reversed for deletes
SECTIONS = (
    ("users", User),
    ("albums", Album),
    ("logs", LoginLog),
)

USER_REQUIRED_FIELDS = ("username", "email", "password_hash")


def _serialize(row) -> dict:
    out = {}
    for column in row.__table__.columns:
        value = getattr(row, column.key)
        if isinstance(value, datetime):
            value = value.isoformat()
        out[column.key] = value
    return out


def _coerce(model, column, value):
    where = f"{model.__tablename__}.{column.key}"
    if value is None:
        if not column.nullable and not column.primary_key:
            raise BackupFormatInvalid(f"{where}: may not be null")
        return None

    kind = column.type
    if isinstance(kind, DateTime):
        if not isinstance(value, str):
            raise BackupFormatInvalid(f"{where}: expected an ISO-8601 string")
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError as exc:
            raise BackupFormatInvalid(f"{where}: bad datetime") from exc
    if isinstance(kind, Boolean):
        if not isinstance(value, bool):
            raise BackupFormatInvalid(f"{where}: expected a boolean")
    elif isinstance(kind, Integer):
        if isinstance(value, bool) or not isinstance(value, int):
            raise BackupFormatInvalid(f"{where}: expected an integer")
    elif isinstance(kind, String):
        if not isinstance(value, str):
            raise BackupFormatInvalid(f"{where}: expected a string")
    return value


def _deserialize(model, entry: dict):
    kwargs = {}
    for column in model.__table__.columns:
        if column.key in entry:
            kwargs[column.key] = _coerce(model, column, entry[column.key])
    return model(**kwargs)


def export_snapshot() -> dict:
    data = {key: [_serialize(r) for r in model.query.order_by(model.id).all()] for key, model in SECTIONS}
    data["metadata"] = {
        "version": current_app.config.get("BACKUP_FORMAT_VERSION", "1.0.0"),
        "date": datetime.utcnow().isoformat(),
    }
    return data


def backup_filename(now: datetime | None = None) -> str:
    now = now or datetime.utcnow()
    return f"vinylvault_backup_{now.strftime('%Y-%m-%d')}.json"


def parse_backup_payload(payload) -> dict:
    """
    Accepts the export document itself, or a wrapper holding it under
    `backupData` (as an object or as a JSON string).
    """
    if isinstance(payload, dict) and "backupData" in payload:
        payload = payload["backupData"]
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except ValueError as exc:
                raise BackupFormatInvalid("backupData is not valid JSON") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("users"), list):
        raise BackupFormatInvalid("users list is required")

    for key, _model in SECTIONS:
        entries = payload.get(key) or []
        if not isinstance(entries, list):
            raise BackupFormatInvalid(f"{key} must be a list")
        if not all(isinstance(e, dict) for e in entries):
            raise BackupFormatInvalid(f"{key} entries must be objects")

    for entry in payload["users"]:
        missing = [f for f in USER_REQUIRED_FIELDS if not isinstance(entry.get(f), str) or not entry.get(f)]
        if missing:
            raise BackupFormatInvalid(f"user entry missing {', '.join(missing)}")
    return payload


def import_snapshot(data: dict) -> dict:
    """
    Replace logs, albums and users with the document's content.

    Deletes run logs -> albums -> users and inserts run in the opposite
    order, all in a single transaction. The caller must drop the request's
    session cookie afterwards. Returns the inserted counts.
    """
    rows = {key: [_deserialize(model, e) for e in (data.get(key) or [])] for key, model in SECTIONS}

    # drop cached instances so re-inserted ids cannot clash with them
    db.session.expunge_all()

    try:
        for _key, model in reversed(SECTIONS):
            model.query.delete(synchronize_session=False)
        db.session.flush()

        for key, _model in SECTIONS:
            db.session.add_all(rows[key])
            db.session.flush()

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    counts = {key: len(rows[key]) for key, _model in SECTIONS}
    logger.warning("Backup imported, all tables replaced: %s", counts)
    return counts
