"""
Pydantic schemas for Activity entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from budget_tracker.models.activity import ActivityStatus


class ActivityBase(BaseModel):
    """Base activity schema."""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    estimated_start_date: date
    estimated_end_date: date
    contractor: Optional[str] = Field(None, max_length=200)
    planned_budget_usd: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class ActivityCreate(ActivityBase):
    """Schema for activity creation. The owning project comes from the URL."""

    @model_validator(mode="after")
    def check_dates(self):
        if self.estimated_end_date < self.estimated_start_date:
            raise ValueError("estimated_end_date must not be before estimated_start_date")
        return self


class ActivityUpdate(BaseModel):
    """Schema for activity update. Only fields that are sent are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    estimated_start_date: Optional[date] = None
    estimated_end_date: Optional[date] = None
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    contractor: Optional[str] = Field(None, max_length=200)
    planned_budget_usd: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    actual_cost_crc: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)  # Amount in CRC
    status: Optional[ActivityStatus] = None


class ActivityStatusUpdate(BaseModel):
    """Schema for a pure status transition."""
    status: ActivityStatus


class ActivityResponse(ActivityBase):
    """Schema for activity response."""
    id: int
    project_id: int
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    actual_cost_crc: Optional[Decimal] = None
    status: ActivityStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
