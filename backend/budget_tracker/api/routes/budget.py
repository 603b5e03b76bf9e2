"""
Budget analysis routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from budget_tracker.db.session import get_db
from budget_tracker.schemas.budget import BudgetAnalysis
from budget_tracker.services.budget_analysis import get_budget_analysis

router = APIRouter(prefix="/projects", tags=["budget"])


@router.get("/{project_id}/budget-analysis", response_model=BudgetAnalysis)
async def get_project_budget_analysis(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Get the budget health dashboard for a project."""
    return get_budget_analysis(project_id, db)
