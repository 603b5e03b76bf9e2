"""
Pydantic schemas for ExchangeRateHistory entity.
"""
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal


class ExchangeRateUpdate(BaseModel):
    """Schema for setting a project's USD to CRC rate."""
    usd_to_crc_rate: Decimal = Field(..., gt=0, max_digits=8, decimal_places=4)  # 1 USD = usd_to_crc_rate CRC


class ExchangeRateHistoryResponse(BaseModel):
    """Schema for exchange rate history response."""
    id: int
    project_id: int
    usd_to_crc_rate: Decimal
    effective_date: datetime
    created_at: datetime

    class Config:
        from_attributes = True
