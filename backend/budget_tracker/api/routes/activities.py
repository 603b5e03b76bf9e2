"""
Activity management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from budget_tracker.db.session import get_db
from budget_tracker.schemas.activity import (
    ActivityCreate, ActivityUpdate, ActivityStatusUpdate, ActivityResponse
)
from budget_tracker.services import activity_service

router = APIRouter(tags=["activities"])


@router.post(
    "/projects/{project_id}/activities",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_activity(
    project_id: int,
    activity_data: ActivityCreate,
    db: Session = Depends(get_db)
):
    """Add an activity to a project."""
    return activity_service.create_activity(project_id, activity_data, db)


@router.get("/projects/{project_id}/activities", response_model=List[ActivityResponse])
async def list_activities(
    project_id: int,
    db: Session = Depends(get_db)
):
    """List a project's activities ordered by estimated start date."""
    return activity_service.list_activities(project_id, db)


@router.patch("/activities/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: int,
    activity_data: ActivityUpdate,
    db: Session = Depends(get_db)
):
    """Update an activity. Only the fields sent are changed."""
    return activity_service.update_activity(activity_id, activity_data, db)


@router.post("/activities/{activity_id}/status", response_model=ActivityResponse)
async def change_activity_status(
    activity_id: int,
    status_data: ActivityStatusUpdate,
    db: Session = Depends(get_db)
):
    """Move an activity to a new status, recording its actual start or end date."""
    return activity_service.transition_status(activity_id, status_data.status, db)
