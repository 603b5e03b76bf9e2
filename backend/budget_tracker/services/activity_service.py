"""
Activity service for activity-related business logic.
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from budget_tracker.core.exceptions import NotFoundError, ValidationError
from budget_tracker.db.session import commit_changes
from budget_tracker.models.activity import Activity, ActivityStatus
from budget_tracker.schemas.activity import ActivityCreate, ActivityUpdate
from budget_tracker.services.project_service import get_project

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending an explicit null
NULLABLE_FIELDS = {"description", "contractor", "actual_start_date", "actual_end_date", "actual_cost_crc"}

TERMINAL_STATUSES = (ActivityStatus.COMPLETED, ActivityStatus.CANCELLED)


def apply_status_transition(activity: Activity, status: ActivityStatus, today: Optional[date] = None) -> Activity:
    """
    Move an activity to a new status and stamp its actual dates.

    Starting work records actual_start_date only if it is still unset.
    Completing or cancelling always records actual_end_date. No other field
    is touched.
    """
    if today is None:
        today = date.today()

    status = ActivityStatus(status)
    if status == ActivityStatus.IN_PROGRESS:
        if activity.actual_start_date is None:
            activity.actual_start_date = today
    elif status in TERMINAL_STATUSES:
        activity.actual_end_date = today

    activity.status = status
    return activity


def create_activity(project_id: int, data: ActivityCreate, db: Session) -> Activity:
    """Create a planned activity in an existing project."""
    get_project(project_id, db)

    activity = Activity(
        project_id=project_id,
        name=data.name,
        description=data.description,
        estimated_start_date=data.estimated_start_date,
        estimated_end_date=data.estimated_end_date,
        contractor=data.contractor,
        planned_budget_usd=data.planned_budget_usd,
        status=ActivityStatus.PLANNED,
    )
    db.add(activity)
    commit_changes(db, "create activity")
    db.refresh(activity)

    logger.info(f"Created activity {activity.id} in project {project_id} with planned budget {activity.planned_budget_usd} USD")
    return activity


def list_activities(project_id: int, db: Session) -> List[Activity]:
    """List a project's activities by estimated start date. Unknown projects simply have none."""
    return db.query(Activity).filter(
        Activity.project_id == project_id
    ).order_by(Activity.estimated_start_date, Activity.id).all()


def get_activity(activity_id: int, db: Session) -> Activity:
    """Get an activity by id or raise NotFoundError."""
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        logger.warning(f"Activity {activity_id} not found")
        raise NotFoundError("Activity", activity_id)
    return activity


def update_activity(activity_id: int, data: ActivityUpdate, db: Session) -> Activity:
    """
    Apply a partial update to an activity.

    A status change stamps the actual dates like a status transition does,
    unless the update sets those dates explicitly.
    """
    activity = get_activity(activity_id, db)
    changes = data.model_dump(exclude_unset=True)

    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            raise ValidationError(f"{field} cannot be null")

    start = changes.get("estimated_start_date", activity.estimated_start_date)
    end = changes.get("estimated_end_date", activity.estimated_end_date)
    if end < start:
        raise ValidationError("estimated_end_date must not be before estimated_start_date")

    new_status = changes.pop("status", None)
    if new_status is not None and new_status != activity.status:
        apply_status_transition(activity, new_status)

    for field, value in changes.items():
        setattr(activity, field, value)
    activity.updated_at = datetime.utcnow()

    commit_changes(db, "update activity")
    db.refresh(activity)

    logger.info(f"Updated activity {activity_id}")
    return activity


def transition_status(activity_id: int, status: ActivityStatus, db: Session) -> Activity:
    """Change only the status of an activity, stamping its actual dates."""
    activity = get_activity(activity_id, db)
    previous = activity.status
    apply_status_transition(activity, status)
    activity.updated_at = datetime.utcnow()

    commit_changes(db, "change activity status")
    db.refresh(activity)

    logger.info(f"Activity {activity_id} moved from {ActivityStatus(previous).value} to {activity.status.value}")
    return activity
