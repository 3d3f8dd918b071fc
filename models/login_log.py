from datetime import datetime
from models.db import db

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


class LoginLog(db.Model):
    __tablename__ = "login_logs"

    id = db.Column(db.Integer, primary_key=True)

    # no foreign key: the snapshot outlives the account
    user_id = db.Column(db.Integer, nullable=True, index=True)
    username = db.Column(db.String(80), nullable=True)
    email = db.Column(db.String(255), nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    country = db.Column(db.String(8), nullable=True)
    city = db.Column(db.String(120), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)

    status = db.Column(db.String(16), default=STATUS_SUCCESS, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "ip": self.ip,
            "country": self.country,
            "city": self.city,
            "user_agent": self.user_agent,
            "status": self.status,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
