# src/models/friendship.py
# -----------------------------------------------------------------------------
# МОДЕЛЬ: Friendship — направленное ребро дружбы (SQLAlchemy)
# -----------------------------------------------------------------------------
#   • Заявка в друзья — ОДНО ребро requester -> recipient со статусом Pending.
#   • Принятая дружба — ДВА зеркальных ребра (A->B и B->A), оба Accepted.
#   • Отклонённая заявка удаляется, статус Rejected в таблице не хранится.

from __future__ import annotations

import enum
from sqlalchemy import (
    Column,
    Integer,
    ForeignKey,
    DateTime,
    Enum,
    UniqueConstraint,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from src.db import Base
from src.utils.dt import utc_now


class FriendshipStatus(enum.Enum):
    Pending = "Pending"
    Accepted = "Accepted"
    Rejected = "Rejected"


class Friendship(Base):
    __tablename__ = "friendships"

    id = Column(Integer, primary_key=True, index=True)

    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    status = Column(
        Enum(FriendshipStatus, name="friendship_status"),
        nullable=False,
        default=FriendshipStatus.Pending,
    )

    created_at = Column(DateTime, nullable=False, default=utc_now)
    # когда пара стала друзьями (одинаково на обоих зеркальных рёбрах)
    accepted_at = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("requester_id", "recipient_id", name="uq_friendship_pair"),
        CheckConstraint("requester_id <> recipient_id", name="ck_friendship_not_self"),
        Index("ix_friendships_requester_status", "requester_id", "status"),
        Index("ix_friendships_recipient_status", "recipient_id", "status"),
    )

    requester = relationship("User", foreign_keys=[requester_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    def __repr__(self):
        return (
            f"<Friendship(id={self.id}, requester_id={self.requester_id}, "
            f"recipient_id={self.recipient_id}, status={self.status})>"
        )
