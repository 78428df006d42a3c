# src/services/friends.py
# Менеджер дружбы: заявки, ответы на них, инвайт-ссылки, списки и поиск.
#
# Модель хранения (см. src/models/friendship.py):
#   • заявка  — одно ребро requester -> recipient, статус Pending;
#   • дружба  — два зеркальных ребра A->B и B->A, оба Accepted;
#   • отказ и удаление из друзей — рёбра удаляются целиком.
#
# Бизнес-отказы (дубликат, чужая заявка, просроченный инвайт) возвращаются как False / None,
# исключения БД (кроме конфликтов уникальности) пробрасываются наверх.
# Каждая мутирующая операция — одна транзакция с одним commit.

from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from typing import Dict, List, Optional

from sqlalchemy import and_, delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src import config
from src.models.friendship import Friendship, FriendshipStatus
from src.models.invite_link import InviteLink
from src.models.user import User
from src.schemas.friend import FriendOut, SearchUserOut
from src.schemas.invite_link import InviteLinkOut
from src.services.auth import exists as user_exists
from src.utils.dt import utc_now

log = logging.getLogger(__name__)

SEARCH_LIMIT = 20

# Метки статуса отношений в результатах поиска
STATUS_NONE = "None"
STATUS_FRIENDS = "Friends"
STATUS_REQUEST_SENT = "RequestSent"
STATUS_REQUEST_RECEIVED = "RequestReceived"


# =========================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =========================

def _between(a: int, b: int):
    """Условие 'любое ребро между a и b в любом направлении'."""
    return or_(
        and_(Friendship.requester_id == a, Friendship.recipient_id == b),
        and_(Friendship.requester_id == b, Friendship.recipient_id == a),
    )


def _has_edge(db: Session, a: int, b: int) -> bool:
    return db.query(Friendship.id).filter(_between(a, b)).first() is not None


def _commit_or_conflict(db: Session) -> bool:
    """
    Commit текущей транзакции. Нарушение уникальности (проигравший в гонке) —
    это бизнес-конфликт: откатываемся и возвращаем False.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def _invite_url(token: str) -> str:
    return f"{config.INVITE_BASE_URL}/invite/{token}"


def _friend_out(edge: Friendship, other: User) -> FriendOut:
    return FriendOut(
        id=edge.id,
        user_id=other.id,
        username=other.username,
        email=other.email,
        status=edge.status.value,
        created_at=edge.created_at,
        accepted_at=edge.accepted_at,
    )


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


# =========================
# ИНВАЙТ-ССЫЛКИ
# =========================

def mint_invite(db: Session, issuer_id: int) -> InviteLinkOut:
    """Выпускает одноразовую инвайт-ссылку со сроком жизни INVITE_TTL_DAYS."""
    token = secrets.token_urlsafe(16)
    expires_at = utc_now() + timedelta(days=config.INVITE_TTL_DAYS)

    invite = InviteLink(issuer_id=issuer_id, token=token, expires_at=expires_at, used=False)
    db.add(invite)
    db.commit()
    db.refresh(invite)

    log.info("invite minted: id=%s issuer=%s expires_at=%s", invite.id, issuer_id, expires_at)
    return InviteLinkOut(token=token, invite_url=_invite_url(token), expires_at=invite.expires_at)


def claim_invite(db: Session, invite_id: int) -> bool:
    """
    Атомарно помечает инвайт использованным (UPDATE ... WHERE used = false).
    True только у одного из параллельных претендентов. Не делает commit.
    """
    res = db.execute(
        update(InviteLink)
        .where(InviteLink.id == invite_id, InviteLink.used.is_(False))
        .values(used=True)
    )
    return res.rowcount == 1


def redeem_invite(db: Session, redeemer_id: int, token: str) -> bool:
    """
    Принимает инвайт: создаёт заявку Pending от redeemer к автору ссылки
    (автор подтверждает её как обычную заявку) и гасит ссылку.
    False: ссылки нет, она использована или просрочена, это своя ссылка,
    либо между пользователями уже есть ребро в любом направлении.
    """
    if not token:
        return False

    invite = (
        db.query(InviteLink)
        .filter(
            InviteLink.token == token,
            InviteLink.used.is_(False),
            InviteLink.expires_at > utc_now(),
        )
        .first()
    )
    if not invite:
        log.debug("redeem rejected: token not found, used or expired (redeemer=%s)", redeemer_id)
        return False

    issuer_id = invite.issuer_id
    if issuer_id == redeemer_id:
        log.debug("redeem rejected: self-redemption (user=%s)", redeemer_id)
        return False

    if _has_edge(db, redeemer_id, issuer_id):
        log.debug("redeem rejected: edge already exists (%s <-> %s)", redeemer_id, issuer_id)
        return False

    if not claim_invite(db, invite.id):
        db.rollback()
        log.debug("redeem rejected: invite %s claimed concurrently", invite.id)
        return False

    db.add(Friendship(
        requester_id=redeemer_id,
        recipient_id=issuer_id,
        status=FriendshipStatus.Pending,
    ))
    if not _commit_or_conflict(db):
        log.debug("redeem rejected: concurrent edge for (%s, %s)", redeemer_id, issuer_id)
        return False

    log.info("invite redeemed: id=%s redeemer=%s issuer=%s", invite.id, redeemer_id, issuer_id)
    return True


# =========================
# ЗАЯВКИ И ДРУЖБА
# =========================

def send_request(db: Session, requester_id: int, target_id: int) -> bool:
    if requester_id == target_id:
        return False
    if not user_exists(db, target_id):
        log.debug("request rejected: target %s not found", target_id)
        return False
    if _has_edge(db, requester_id, target_id):
        log.debug("request rejected: edge already exists (%s <-> %s)", requester_id, target_id)
        return False

    db.add(Friendship(
        requester_id=requester_id,
        recipient_id=target_id,
        status=FriendshipStatus.Pending,
    ))
    if not _commit_or_conflict(db):
        return False

    log.info("friend request sent: %s -> %s", requester_id, target_id)
    return True


def respond_to_request(db: Session, responder_id: int, friendship_id: int, accept: bool) -> bool:
    """
    Ответ получателя на заявку.
      accept=True  -> ребро становится Accepted + вставляется зеркальное Accepted-ребро;
      accept=False -> ребро удаляется.
    Заявка забирается условным UPDATE/DELETE по status = Pending,
    поэтому параллельные accept и reject не могут пройти оба.
    """
    edge = (
        db.query(Friendship)
        .filter(
            Friendship.id == friendship_id,
            Friendship.recipient_id == responder_id,
            Friendship.status == FriendshipStatus.Pending,
        )
        .first()
    )
    if not edge:
        log.debug("respond rejected: no pending request %s for user %s", friendship_id, responder_id)
        return False

    requester_id = edge.requester_id
    pending_only = and_(Friendship.id == friendship_id, Friendship.status == FriendshipStatus.Pending)

    if accept:
        now = utc_now()
        res = db.execute(
            update(Friendship)
            .where(pending_only)
            .values(status=FriendshipStatus.Accepted, accepted_at=now)
        )
        if res.rowcount != 1:
            db.rollback()
            return False

        # Встречная заявка могла появиться параллельно — тогда принимаем её вместо вставки
        mirror = (
            db.query(Friendship)
            .filter(Friendship.requester_id == responder_id, Friendship.recipient_id == requester_id)
            .first()
        )
        if mirror:
            mirror.status = FriendshipStatus.Accepted
            mirror.accepted_at = now
        else:
            db.add(Friendship(
                requester_id=responder_id,
                recipient_id=requester_id,
                status=FriendshipStatus.Accepted,
                created_at=now,
                accepted_at=now,
            ))
    else:
        res = db.execute(delete(Friendship).where(pending_only))
        if res.rowcount != 1:
            db.rollback()
            return False

    if not _commit_or_conflict(db):
        return False

    log.info(
        "friend request %s: id=%s %s -> %s",
        "accepted" if accept else "rejected", friendship_id, requester_id, responder_id,
    )
    return True


def remove_friendship(db: Session, user_id: int, other_id: int) -> bool:
    """Удаляет все рёбра между парой (0, 1 или 2 строки). False — если удалять было нечего."""
    res = db.execute(delete(Friendship).where(_between(user_id, other_id)))
    if res.rowcount == 0:
        db.rollback()
        return False
    db.commit()

    log.info("friendship removed: %s <-> %s (%s edges)", user_id, other_id, res.rowcount)
    return True


# =========================
# СПИСКИ
# =========================

def list_friends(db: Session, user_id: int) -> List[FriendOut]:
    """Друзья пользователя (его исходящие Accepted-рёбра), сначала самые свежие."""
    rows = (
        db.query(Friendship, User)
        .join(User, User.id == Friendship.recipient_id)
        .filter(Friendship.requester_id == user_id, Friendship.status == FriendshipStatus.Accepted)
        .order_by(Friendship.accepted_at.desc(), Friendship.id.desc())
        .all()
    )
    return [_friend_out(edge, other) for edge, other in rows]


def list_pending(db: Session, user_id: int) -> List[FriendOut]:
    """Входящие заявки: user — получатель, в user_id лежит отправитель."""
    rows = (
        db.query(Friendship, User)
        .join(User, User.id == Friendship.requester_id)
        .filter(Friendship.recipient_id == user_id, Friendship.status == FriendshipStatus.Pending)
        .order_by(Friendship.created_at.desc(), Friendship.id.desc())
        .all()
    )
    return [_friend_out(edge, other) for edge, other in rows]


def list_sent(db: Session, user_id: int) -> List[FriendOut]:
    """Исходящие заявки: user — отправитель, в user_id лежит получатель."""
    rows = (
        db.query(Friendship, User)
        .join(User, User.id == Friendship.recipient_id)
        .filter(Friendship.requester_id == user_id, Friendship.status == FriendshipStatus.Pending)
        .order_by(Friendship.created_at.desc(), Friendship.id.desc())
        .all()
    )
    return [_friend_out(edge, other) for edge, other in rows]


def friend_ids(db: Session, user_id: int) -> List[int]:
    """id всех друзей. Благодаря зеркальным рёбрам достаточно исходящей стороны."""
    rows = (
        db.query(Friendship.recipient_id)
        .filter(Friendship.requester_id == user_id, Friendship.status == FriendshipStatus.Accepted)
        .all()
    )
    return [row[0] for row in rows]


# =========================
# ПОИСК
# =========================

def _relationship_label(edge: Friendship, viewer_id: int) -> str:
    if edge.status == FriendshipStatus.Accepted:
        return STATUS_FRIENDS
    if edge.requester_id == viewer_id:
        return STATUS_REQUEST_SENT
    return STATUS_REQUEST_RECEIVED


def search_identities(db: Session, current_user_id: int, term: Optional[str]) -> List[SearchUserOut]:
    """
    Поиск пользователей по подстроке username/email без учёта регистра (ILIKE),
    не больше SEARCH_LIMIT, без самого ищущего. К каждому — метка отношений.
    """
    term = (term or "").strip()
    if not term:
        return []

    pattern = _like_pattern(term)
    users = (
        db.query(User)
        .filter(
            User.id != current_user_id,
            or_(User.username.ilike(pattern, escape="\\"), User.email.ilike(pattern, escape="\\")),
        )
        .order_by(User.username.asc())
        .limit(SEARCH_LIMIT)
        .all()
    )
    if not users:
        return []

    ids = [u.id for u in users]
    edges = (
        db.query(Friendship)
        .filter(or_(
            and_(Friendship.requester_id == current_user_id, Friendship.recipient_id.in_(ids)),
            and_(Friendship.recipient_id == current_user_id, Friendship.requester_id.in_(ids)),
        ))
        .all()
    )

    labels: Dict[int, str] = {}
    for edge in edges:
        other_id = edge.recipient_id if edge.requester_id == current_user_id else edge.requester_id
        if labels.get(other_id) == STATUS_FRIENDS:
            continue
        labels[other_id] = _relationship_label(edge, current_user_id)

    return [
        SearchUserOut(
            id=u.id,
            username=u.username,
            email=u.email,
            friendship_status=labels.get(u.id, STATUS_NONE),
        )
        for u in users
    ]
