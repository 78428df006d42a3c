# src/schemas/recommendation.py

from typing import List, Optional
from pydantic import Field
from src.schemas.base import CamelModel, UtcDatetime

class RecommendationCreate(CamelModel):
    """
    Если recommended_to_user_ids пуст — рекомендация уходит всем друзьям автора
    (или самому автору, если друзей нет).
    """
    title: str = Field(..., min_length=1, max_length=255)
    type: str
    description: Optional[str] = None
    external_id: Optional[str] = Field(None, max_length=128)
    recommended_to_user_ids: Optional[List[int]] = None

class RecommendationStatusUpdate(CamelModel):
    status: str

class RecommendationOut(CamelModel):
    id: int
    created_by_user_id: int
    created_by_username: str
    recommended_to_user_id: int
    recommended_to_username: str
    title: str
    type: str
    description: Optional[str] = None
    external_id: Optional[str] = None
    status: str
    created_at: UtcDatetime
    completed_at: Optional[UtcDatetime] = None
