"""
Project management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from budget_tracker.db.session import get_db
from budget_tracker.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from budget_tracker.services import project_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db)
):
    """Create a new construction project."""
    return project_service.create_project(project_data, db)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(db: Session = Depends(get_db)):
    """List all projects."""
    return project_service.list_projects(db)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Get project details."""
    return project_service.get_project(project_id, db)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    db: Session = Depends(get_db)
):
    """Update a project. Only the fields sent are changed."""
    return project_service.update_project(project_id, project_data, db)
