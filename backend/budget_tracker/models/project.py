"""
Project model for construction budget tracking.
"""
from sqlalchemy import Column, String, Date, Numeric, Text
from sqlalchemy.orm import relationship
from budget_tracker.db.base import BaseModel


class Project(BaseModel):
    """Construction project with a USD budget and its current USD to CRC rate."""
    __tablename__ = "projects"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    total_budget_usd = Column(Numeric(12, 2), nullable=False)
    current_exchange_rate = Column(Numeric(8, 4), nullable=False)  # CRC per 1 USD
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    # Relationships
    activities = relationship("Activity", back_populates="project", cascade="all, delete-orphan")
    exchange_rate_history = relationship(
        "ExchangeRateHistory", back_populates="project", cascade="all, delete-orphan"
    )
