# src/services/recommendations.py
# Каталог рекомендаций: создание с рассылкой друзьям, выборки с учётом видимости, смена статуса.
# Видимость записи — только автору и получателю.

from __future__ import annotations

import enum
import logging
from typing import List, Optional, Type, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from src.models.recommendation import Recommendation, RecommendationStatus, RecommendationType
from src.models.user import User
from src.schemas.recommendation import RecommendationOut
from src.services.friends import friend_ids
from src.utils.dt import utc_now

log = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)


def parse_enum(enum_cls: Type[E], raw: Optional[str]) -> Optional[E]:
    """Имя значения enum без учёта регистра ('tvshow' -> TvShow). None, если не распознано."""
    if not raw:
        return None
    wanted = raw.strip().lower()
    for member in enum_cls:
        if member.name.lower() == wanted:
            return member
    return None


def _to_out(rec: Recommendation) -> RecommendationOut:
    return RecommendationOut(
        id=rec.id,
        created_by_user_id=rec.created_by_user_id,
        created_by_username=rec.created_by_user.username,
        recommended_to_user_id=rec.recommended_to_user_id,
        recommended_to_username=rec.recommended_to_user.username,
        title=rec.title,
        type=rec.type.value,
        description=rec.description,
        external_id=rec.external_id,
        status=rec.status.value,
        created_at=rec.created_at,
        completed_at=rec.completed_at,
    )


def _visible_query(db: Session, user_id: int):
    return (
        db.query(Recommendation)
        .options(
            joinedload(Recommendation.created_by_user),
            joinedload(Recommendation.recommended_to_user),
        )
        .filter(or_(
            Recommendation.created_by_user_id == user_id,
            Recommendation.recommended_to_user_id == user_id,
        ))
    )


def types() -> List[str]:
    return [t.name for t in RecommendationType]


def create(
    db: Session,
    creator_id: int,
    *,
    title: str,
    type: str,
    description: Optional[str] = None,
    external_id: Optional[str] = None,
    recipient_ids: Optional[List[int]] = None,
) -> Optional[List[RecommendationOut]]:
    """
    Создаёт по записи на каждого получателя.
    Без явных получателей — всем друзьям автора, а если друзей нет — самому автору.
    None — неизвестный тип или несуществующий получатель.
    """
    rec_type = parse_enum(RecommendationType, type)
    if rec_type is None:
        log.debug("recommendation rejected: unknown type %r", type)
        return None

    targets = list(dict.fromkeys(recipient_ids or []))
    if targets:
        known = {row[0] for row in db.query(User.id).filter(User.id.in_(targets)).all()}
        if len(known) != len(targets):
            log.debug("recommendation rejected: unknown recipients %s", set(targets) - known)
            return None
    else:
        targets = friend_ids(db, creator_id) or [creator_id]

    created = [
        Recommendation(
            created_by_user_id=creator_id,
            recommended_to_user_id=target_id,
            title=title,
            type=rec_type,
            description=description,
            external_id=external_id,
            status=RecommendationStatus.Unseen,
        )
        for target_id in targets
    ]
    db.add_all(created)
    db.commit()

    ids = [r.id for r in created]
    log.info("recommendation created: creator=%s title=%r recipients=%s", creator_id, title, targets)

    rows = (
        _visible_query(db, creator_id)
        .filter(Recommendation.id.in_(ids))
        .order_by(Recommendation.id.asc())
        .all()
    )
    return [_to_out(r) for r in rows]


def list_visible(
    db: Session,
    user_id: int,
    type: Optional[str] = None,
    friend_id: Optional[int] = None,
) -> List[RecommendationOut]:
    """
    Полученные и созданные пользователем рекомендации, новые сверху.
    type — фильтр по типу (нераспознанный тип игнорируется), friend_id — по автору.
    """
    q = _visible_query(db, user_id)

    rec_type = parse_enum(RecommendationType, type)
    if rec_type is not None:
        q = q.filter(Recommendation.type == rec_type)
    if friend_id is not None:
        q = q.filter(Recommendation.created_by_user_id == friend_id)

    rows = q.order_by(Recommendation.created_at.desc(), Recommendation.id.desc()).all()
    return [_to_out(r) for r in rows]


def get(db: Session, recommendation_id: int, user_id: int) -> Optional[RecommendationOut]:
    rec = _visible_query(db, user_id).filter(Recommendation.id == recommendation_id).first()
    return _to_out(rec) if rec else None


def update_status(db: Session, recommendation_id: int, user_id: int, status: str) -> bool:
    """
    Менять статус может только получатель.
    Watched проставляет completed_at, любой другой статус его сбрасывает.
    """
    new_status = parse_enum(RecommendationStatus, status)
    if new_status is None:
        return False

    rec = (
        db.query(Recommendation)
        .filter(Recommendation.id == recommendation_id, Recommendation.recommended_to_user_id == user_id)
        .first()
    )
    if not rec:
        return False

    rec.status = new_status
    rec.completed_at = utc_now() if new_status == RecommendationStatus.Watched else None
    db.commit()

    log.info("recommendation %s status -> %s (user=%s)", recommendation_id, new_status.value, user_id)
    return True


def delete(db: Session, recommendation_id: int, user_id: int) -> bool:
    rec = (
        db.query(Recommendation)
        .filter(
            Recommendation.id == recommendation_id,
            or_(
                Recommendation.created_by_user_id == user_id,
                Recommendation.recommended_to_user_id == user_id,
            ),
        )
        .first()
    )
    if not rec:
        return False

    db.delete(rec)
    db.commit()

    log.info("recommendation %s deleted by user %s", recommendation_id, user_id)
    return True
