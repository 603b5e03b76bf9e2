"""
Exchange rate routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from budget_tracker.db.session import get_db
from budget_tracker.schemas.exchange_rate import ExchangeRateUpdate, ExchangeRateHistoryResponse
from budget_tracker.services import fx_service

router = APIRouter(prefix="/projects", tags=["fx-rates"])


@router.post(
    "/{project_id}/exchange-rate",
    response_model=ExchangeRateHistoryResponse,
    status_code=status.HTTP_201_CREATED
)
async def update_exchange_rate(
    project_id: int,
    rate_data: ExchangeRateUpdate,
    db: Session = Depends(get_db)
):
    """Set the project's USD to CRC rate and record it in the history."""
    return fx_service.update_exchange_rate(project_id, rate_data.usd_to_crc_rate, db)


@router.post(
    "/{project_id}/exchange-rate/refresh",
    response_model=ExchangeRateHistoryResponse,
    status_code=status.HTTP_201_CREATED
)
async def refresh_exchange_rate(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Fetch today's USD to CRC market rate and apply it to the project."""
    return fx_service.refresh_exchange_rate(project_id, db)


@router.get("/{project_id}/exchange-rate/history", response_model=List[ExchangeRateHistoryResponse])
async def get_exchange_rate_history(
    project_id: int,
    db: Session = Depends(get_db)
):
    """List the project's exchange rate history, newest first."""
    return fx_service.get_exchange_rate_history(project_id, db)
