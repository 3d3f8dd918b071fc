from datetime import datetime
from models.db import db

MEDIA_TYPES = ("vinyl", "cd", "cassette")


class Album(db.Model):
    __tablename__ = "albums"

    id = db.Column(db.Integer, primary_key=True)

    title = db.Column(db.String(255), nullable=False)
    artist = db.Column(db.String(255), nullable=False, index=True)
    year = db.Column(db.String(10), nullable=True)
    label = db.Column(db.String(255), nullable=True)
    catalog_number = db.Column(db.String(120), nullable=True)

    media_type = db.Column(db.String(20), default="vinyl", nullable=False)
    format_type = db.Column(db.String(60), default="Vinyl", nullable=True)
    variant_color = db.Column(db.String(120), nullable=True)
    comments = db.Column(db.Text, default="", nullable=True)

    # list of {"position", "title", "duration"}
    tracklist = db.Column(db.JSON, nullable=True)

    location = db.Column(db.String(255), default="", nullable=True)
    cover_image = db.Column(db.String(512), nullable=True)
    user_image = db.Column(db.String(512), nullable=True)
    in_wishlist = db.Column(db.Boolean, default=False, nullable=False)
    discogs_id = db.Column(db.Integer, nullable=True)

    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    owner = db.relationship("User", back_populates="albums")

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "year": self.year,
            "media_type": self.media_type,
            "cover_image": self.cover_image,
            "in_wishlist": self.in_wishlist,
            "added_at": self.added_at.isoformat() if self.added_at else None,
        }
