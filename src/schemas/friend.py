# src/schemas/friend.py

from typing import Optional
from src.schemas.base import CamelModel, UtcDatetime

class FriendOut(CamelModel):
    """
    Одна связь в списках друзей / заявок:
      - id         -> id ребра (для заявок это friendshipId для ответа)
      - user_id    -> id ВТОРОЙ стороны (друга, отправителя или получателя заявки)
      - username, email -> профиль второй стороны
      - status     -> Pending / Accepted
      - accepted_at -> когда стали друзьями (None для заявок)
    """
    id: int
    user_id: int
    username: str
    email: str
    status: str
    created_at: UtcDatetime
    accepted_at: Optional[UtcDatetime] = None

class SearchUserOut(CamelModel):
    """friendship_status: None / Friends / RequestSent / RequestReceived."""
    id: int
    username: str
    email: str
    friendship_status: str

class SendFriendRequest(CamelModel):
    target_user_id: int

class RespondToFriendRequest(CamelModel):
    friendship_id: int
    accept: bool
