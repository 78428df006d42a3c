# src/models/invite_link.py

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean
from sqlalchemy.orm import relationship
from src.db import Base
from src.utils.dt import utc_now

class InviteLink(Base):
    """
    Инвайт-ссылка для добавления в друзья.
    Одноразовая и ограниченная по времени: после used=True или expires_at повторно не принимается.
    Просроченные ссылки не удаляются (остаются для истории).
    """
    __tablename__ = "invite_links"

    id = Column(Integer, primary_key=True, index=True)
    issuer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    issuer = relationship("User", foreign_keys=[issuer_id])

    def __repr__(self):
        return f"<InviteLink(id={self.id}, issuer_id={self.issuer_id}, used={self.used}, expires_at={self.expires_at})>"
