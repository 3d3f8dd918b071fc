from datetime import datetime
from models.db import db

THEMES = ("light", "dark")
LANGUAGES = ("fr", "en")
DEFAULT_AVATAR = "/static/no-pp.jpg"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    # storage-level uniqueness is the authoritative guard against duplicate accounts
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    avatar = db.Column(db.String(255), default=DEFAULT_AVATAR, nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    theme = db.Column(db.String(10), default="dark", nullable=False)
    language = db.Column(db.String(5), default="fr", nullable=False)

    # last credential mutation; tokens issued before it are revoked
    last_change = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    albums = db.relationship("Album", back_populates="owner")

    def to_public_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "avatar": self.avatar,
            "is_admin": self.is_admin,
            "theme": self.theme,
            "language": self.language,
            "last_change": self.last_change.isoformat() if self.last_change else None,
        }
