from collections import Counter

from flask import Blueprint, jsonify

from models.album import Album
from models.user import User
from security.rbac import require_authenticated
from utils.auth_context import current_user

collection_bp = Blueprint("collection", __name__)

LATEST_COUNT = 4


def _collection_owner_id():
    # the catalogued collection belongs to the administrator
    admin = User.query.filter_by(is_admin=True).order_by(User.id).first()
    return admin.id if admin else None


@collection_bp.get("/")
@require_authenticated
def home():
    owner_id = _collection_owner_id()
    base = Album.query.filter_by(owner_id=owner_id)

    latest_collection = base.filter_by(in_wishlist=False).order_by(Album.added_at.desc()).limit(LATEST_COUNT).all()
    latest_wishlist = base.filter_by(in_wishlist=True).order_by(Album.added_at.desc()).limit(LATEST_COUNT).all()

    owned = base.filter_by(in_wishlist=False).all()
    media = Counter(a.media_type for a in owned)
    top = Counter(a.artist for a in owned).most_common(1)

    return jsonify(
        user=current_user().to_public_dict(),
        latest_collection=[a.to_summary() for a in latest_collection],
        latest_wishlist=[a.to_summary() for a in latest_wishlist],
        stats={
            "total": len(owned),
            "vinyl_count": len(owned) - media["cd"] - media["cassette"],
            "cd_count": media["cd"],
            "cassette_count": media["cassette"],
            "top_artist": top[0][0] if top else None,
            "top_artist_count": top[0][1] if top else 0,
        },
    ), 200
