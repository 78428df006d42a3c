# src/routers/recommendations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.db import get_db
from src.models.user import User
from src.schemas.recommendation import RecommendationCreate, RecommendationOut, RecommendationStatusUpdate
from src.services import recommendations as recommendations_service
from src.utils.auth_dep import get_current_user

router = APIRouter()


@router.get("/", response_model=List[RecommendationOut])
def get_recommendations(
    type: Optional[str] = Query(None),
    friend_id: Optional[int] = Query(None, alias="friendId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Полученные и созданные рекомендации (фильтры: тип, автор)."""
    return recommendations_service.list_visible(db, current_user.id, type=type, friend_id=friend_id)


@router.get("/types", response_model=List[str])
def get_recommendation_types():
    return recommendations_service.types()


@router.get("/{recommendation_id}", response_model=RecommendationOut)
def get_recommendation(
    recommendation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rec = recommendations_service.get(db, recommendation_id, current_user.id)
    if not rec:
        raise HTTPException(404, detail={"code": "recommendation_not_found", "message": "Recommendation not found"})
    return rec


@router.post("/", response_model=List[RecommendationOut])
def create_recommendation(
    payload: RecommendationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Без recommendedToUserIds — рассылка всем друзьям (или себе, если друзей нет).
    """
    created = recommendations_service.create(
        db,
        current_user.id,
        title=payload.title,
        type=payload.type,
        description=payload.description,
        external_id=payload.external_id,
        recipient_ids=payload.recommended_to_user_ids,
    )
    if created is None:
        raise HTTPException(400, detail={"code": "recommendation_invalid", "message": "Invalid recommendation type or recipient"})
    return created


@router.put("/{recommendation_id}", response_model=dict)
def update_recommendation_status(
    recommendation_id: int,
    payload: RecommendationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not recommendations_service.update_status(db, recommendation_id, current_user.id, payload.status):
        raise HTTPException(400, detail={"code": "status_invalid", "message": "Invalid status or recommendation not found"})
    return {"message": "Recommendation updated successfully"}


@router.delete("/{recommendation_id}", response_model=dict)
def delete_recommendation(
    recommendation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not recommendations_service.delete(db, recommendation_id, current_user.id):
        raise HTTPException(404, detail={"code": "recommendation_not_found", "message": "Recommendation not found"})
    return {"message": "Recommendation deleted successfully"}
