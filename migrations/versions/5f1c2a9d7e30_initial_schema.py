"""initial schema: users, albums, login logs, blocked ips

Revision ID: 5f1c2a9d7e30
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5f1c2a9d7e30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=80), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("avatar", sa.String(length=255), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("theme", sa.String(length=10), nullable=False),
        sa.Column("language", sa.String(length=5), nullable=False),
        sa.Column("last_change", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_username"), ["username"], unique=True)
        batch_op.create_index(batch_op.f("ix_users_email"), ["email"], unique=True)

    op.create_table(
        "albums",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("artist", sa.String(length=255), nullable=False),
        sa.Column("year", sa.String(length=10), nullable=True),
        sa.Column("label", sa.String(length=255), nullable=True),
        sa.Column("catalog_number", sa.String(length=120), nullable=True),
        sa.Column("media_type", sa.String(length=20), nullable=False),
        sa.Column("format_type", sa.String(length=60), nullable=True),
        sa.Column("variant_color", sa.String(length=120), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("tracklist", sa.JSON(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("cover_image", sa.String(length=512), nullable=True),
        sa.Column("user_image", sa.String(length=512), nullable=True),
        sa.Column("in_wishlist", sa.Boolean(), nullable=False),
        sa.Column("discogs_id", sa.Integer(), nullable=True),
        sa.Column("added_at", sa.DateTime(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("albums", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_albums_artist"), ["artist"], unique=False)
        batch_op.create_index(batch_op.f("ix_albums_owner_id"), ["owner_id"], unique=False)

    op.create_table(
        "login_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("username", sa.String(length=80), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("country", sa.String(length=8), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("user_agent", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("login_logs", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_login_logs_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_login_logs_timestamp"), ["timestamp"], unique=False)

    op.create_table(
        "blocked_ips",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("ip", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("blocked_ips", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_blocked_ips_ip"), ["ip"], unique=True)


def downgrade():
    with op.batch_alter_table("blocked_ips", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_blocked_ips_ip"))
    op.drop_table("blocked_ips")

    with op.batch_alter_table("login_logs", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_login_logs_timestamp"))
        batch_op.drop_index(batch_op.f("ix_login_logs_user_id"))
    op.drop_table("login_logs")

    with op.batch_alter_table("albums", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_albums_owner_id"))
        batch_op.drop_index(batch_op.f("ix_albums_artist"))
    op.drop_table("albums")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_email"))
        batch_op.drop_index(batch_op.f("ix_users_username"))
    op.drop_table("users")
