"""
Pydantic schemas for Project entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class ProjectBase(BaseModel):
    """Base project schema."""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    total_budget_usd: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    current_exchange_rate: Decimal = Field(..., gt=0, max_digits=8, decimal_places=4)  # CRC per 1 USD
    start_date: date
    end_date: date


class ProjectCreate(ProjectBase):
    """Schema for project creation."""

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectUpdate(BaseModel):
    """Schema for project update. Only fields that are sent are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    total_budget_usd: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    current_exchange_rate: Optional[Decimal] = Field(None, gt=0, max_digits=8, decimal_places=4)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ProjectResponse(ProjectBase):
    """Schema for project response."""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
