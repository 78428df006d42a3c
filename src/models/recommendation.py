# src/models/recommendation.py
# -----------------------------------------------------------------------------
# МОДЕЛЬ: Recommendation (SQLAlchemy)
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    Enum,
    DateTime,
    Index,
)
from sqlalchemy.orm import relationship

from src.db import Base
from src.utils.dt import utc_now


class RecommendationType(enum.Enum):
    Movie = "Movie"
    Book = "Book"
    Game = "Game"
    TvShow = "TvShow"
    Podcast = "Podcast"
    Music = "Music"
    Other = "Other"


class RecommendationStatus(enum.Enum):
    Unseen = "Unseen"
    InProgress = "InProgress"
    Watched = "Watched"


class Recommendation(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recommended_to_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    type = Column(Enum(RecommendationType, name="recommendation_type"), nullable=False)
    description = Column(Text, nullable=True)
    external_id = Column(String(128), nullable=True)

    status = Column(
        Enum(RecommendationStatus, name="recommendation_status"),
        nullable=False,
        default=RecommendationStatus.Unseen,
    )

    created_at = Column(DateTime, nullable=False, default=utc_now)
    # проставляется только при переходе в Watched
    completed_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_recommendations_created_by", "created_by_user_id"),
        Index("ix_recommendations_recommended_to", "recommended_to_user_id"),
    )

    created_by_user = relationship("User", foreign_keys=[created_by_user_id])
    recommended_to_user = relationship("User", foreign_keys=[recommended_to_user_id])

    def __repr__(self) -> str:
        return f"<Recommendation id={self.id} title={self.title!r} to={self.recommended_to_user_id} status={self.status}>"
