"""
Project service for project-related business logic.
"""
import logging
from datetime import datetime
from typing import List
from sqlalchemy.orm import Session
from budget_tracker.core.exceptions import NotFoundError, ValidationError
from budget_tracker.db.session import commit_changes, flush_changes
from budget_tracker.models.project import Project
from budget_tracker.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending an explicit null
NULLABLE_FIELDS = {"description"}


def create_project(data: ProjectCreate, db: Session) -> Project:
    """Create a project and seed its exchange rate history with the initial rate."""
    from budget_tracker.services.fx_service import record_rate_change

    project = Project(
        name=data.name,
        description=data.description,
        total_budget_usd=data.total_budget_usd,
        current_exchange_rate=data.current_exchange_rate,
        start_date=data.start_date,
        end_date=data.end_date,
    )
    db.add(project)
    flush_changes(db, "create project")

    record_rate_change(project, data.current_exchange_rate, db)
    commit_changes(db, "create project")
    db.refresh(project)

    logger.info(f"Created project {project.id} ({project.name}) with budget {project.total_budget_usd} USD")
    return project


def list_projects(db: Session) -> List[Project]:
    """List all projects."""
    return db.query(Project).order_by(Project.id).all()


def get_project(project_id: int, db: Session) -> Project:
    """Get a project by id or raise NotFoundError."""
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        logger.warning(f"Project {project_id} not found")
        raise NotFoundError("Project", project_id)
    return project


def update_project(project_id: int, data: ProjectUpdate, db: Session) -> Project:
    """
    Apply a partial update to a project.

    A new current_exchange_rate goes through the exchange rate history so the
    current rate and its audit trail are written in the same transaction.
    """
    from budget_tracker.services.fx_service import record_rate_change

    project = get_project(project_id, db)
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            raise ValidationError(f"{field} cannot be null")
    new_rate = changes.pop("current_exchange_rate", None)

    start_date = changes.get("start_date", project.start_date)
    end_date = changes.get("end_date", project.end_date)
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")

    for field, value in changes.items():
        setattr(project, field, value)

    if new_rate is not None:
        record_rate_change(project, new_rate, db)
    project.updated_at = datetime.utcnow()

    commit_changes(db, "update project")
    db.refresh(project)

    logger.info(f"Updated project {project_id}")
    return project
