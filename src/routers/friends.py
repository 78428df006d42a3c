# src/routers/friends.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.db import get_db
from src.models.user import User
from src.schemas.friend import FriendOut, RespondToFriendRequest, SearchUserOut, SendFriendRequest
from src.schemas.invite_link import AcceptInviteRequest, InviteLinkOut
from src.services import friends as friends_service
from src.utils.auth_dep import get_current_user

router = APIRouter()


# =========================
# СПИСКИ
# =========================

@router.get("/", response_model=List[FriendOut])
def get_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Друзья текущего пользователя, сначала самые свежие."""
    return friends_service.list_friends(db, current_user.id)


@router.get("/pending", response_model=List[FriendOut])
def get_pending_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Входящие заявки (id записи — это friendshipId для ответа)."""
    return friends_service.list_pending(db, current_user.id)


@router.get("/sent", response_model=List[FriendOut])
def get_sent_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return friends_service.list_sent(db, current_user.id)


@router.get("/search", response_model=List[SearchUserOut])
def search_users(
    query: Optional[str] = Query(None, description="Подстрока username/email"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Поиск по ВСЕМ пользователям (не только друзьям) с меткой отношений:
    None / Friends / RequestSent / RequestReceived.
    """
    return friends_service.search_identities(db, current_user.id, query)


# =========================
# ИНВАЙТ-ССЫЛКИ
# =========================

@router.post("/invite", response_model=InviteLinkOut)
def create_invite(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return friends_service.mint_invite(db, current_user.id)


@router.post("/invite/accept", response_model=dict)
def accept_invite(
    payload: AcceptInviteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not friends_service.redeem_invite(db, current_user.id, payload.token):
        raise HTTPException(400, detail={"code": "invite_invalid", "message": "Invalid or expired invite link"})
    return {"message": "Friend request sent successfully"}


# =========================
# ЗАЯВКИ
# =========================

@router.post("/request", response_model=dict)
def send_friend_request(
    payload: SendFriendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not friends_service.send_request(db, current_user.id, payload.target_user_id):
        raise HTTPException(400, detail={"code": "request_rejected", "message": "Unable to send friend request"})
    return {"message": "Friend request sent successfully"}


@router.post("/request/respond", response_model=dict)
def respond_to_friend_request(
    payload: RespondToFriendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ok = friends_service.respond_to_request(db, current_user.id, payload.friendship_id, payload.accept)
    if not ok:
        raise HTTPException(400, detail={"code": "request_invalid", "message": "Invalid friend request"})
    return {"message": "Friend request accepted" if payload.accept else "Friend request rejected"}


@router.delete("/{friend_id}", response_model=dict)
def remove_friend(
    friend_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Удаляет дружбу (или висящую заявку) в обе стороны."""
    if not friends_service.remove_friendship(db, current_user.id, friend_id):
        raise HTTPException(404, detail={"code": "friend_not_found", "message": "Friend not found"})
    return {"message": "Friend removed successfully"}
