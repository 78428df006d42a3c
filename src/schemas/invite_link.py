# src/schemas/invite_link.py

from src.schemas.base import CamelModel, UtcDatetime

class InviteLinkOut(CamelModel):
    token: str
    invite_url: str
    expires_at: UtcDatetime

class AcceptInviteRequest(CamelModel):
    token: str
