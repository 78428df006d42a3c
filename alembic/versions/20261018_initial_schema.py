"""initial schema: users, friendships, invite_links, recommendations

Revision ID: 20261018_initial_schema
Revises:
Create Date: 2026-10-18 12:00:00.000000

Описание:
- users: уникальные email и username.
- friendships: направленные рёбра, уникальность (requester_id, recipient_id), запрет self-дружбы.
- invite_links: одноразовые токены со сроком жизни.
- recommendations: рекомендации со статусом и completed_at.
"""

from __future__ import annotations

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

FRIENDSHIP_STATUS = ("Pending", "Accepted", "Rejected")
RECOMMENDATION_TYPE = ("Movie", "Book", "Game", "TvShow", "Podcast", "Music", "Other")
RECOMMENDATION_STATUS = ("Unseen", "InProgress", "Watched")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "friendships",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("requester_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.Enum(*FRIENDSHIP_STATUS, name="friendship_status"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("accepted_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("requester_id", "recipient_id", name="uq_friendship_pair"),
        sa.CheckConstraint("requester_id <> recipient_id", name="ck_friendship_not_self"),
    )
    op.create_index("ix_friendships_id", "friendships", ["id"])
    op.create_index("ix_friendships_requester_status", "friendships", ["requester_id", "status"])
    op.create_index("ix_friendships_recipient_status", "friendships", ["recipient_id", "status"])

    op.create_table(
        "invite_links",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("issuer_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_invite_links_id", "invite_links", ["id"])
    op.create_index("ix_invite_links_token", "invite_links", ["token"], unique=True)
    op.create_index("ix_invite_links_issuer_id", "invite_links", ["issuer_id"])

    op.create_table(
        "recommendations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_by_user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recommended_to_user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("type", sa.Enum(*RECOMMENDATION_TYPE, name="recommendation_type"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("external_id", sa.String(length=128), nullable=True),
        sa.Column("status", sa.Enum(*RECOMMENDATION_STATUS, name="recommendation_status"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_recommendations_id", "recommendations", ["id"])
    op.create_index("ix_recommendations_created_by", "recommendations", ["created_by_user_id"])
    op.create_index("ix_recommendations_recommended_to", "recommendations", ["recommended_to_user_id"])


def downgrade() -> None:
    op.drop_table("recommendations")
    op.drop_table("invite_links")
    op.drop_table("friendships")
    op.drop_table("users")

    bind = op.get_bind()
    for name in ("recommendation_status", "recommendation_type", "friendship_status"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
