"""Models package - Import all models for SQLAlchemy registration."""
from budget_tracker.models.project import Project
from budget_tracker.models.activity import Activity, ActivityStatus
from budget_tracker.models.exchange_rate import ExchangeRateHistory

__all__ = [
    "Project",
    "Activity",
    "ActivityStatus",
    "ExchangeRateHistory",
]
