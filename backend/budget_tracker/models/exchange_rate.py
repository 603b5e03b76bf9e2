"""
Exchange rate history model.
"""
from datetime import datetime
from sqlalchemy import Column, DateTime, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from budget_tracker.db.base import BaseModel


class ExchangeRateHistory(BaseModel):
    """Append-only record of every USD to CRC rate a project has used."""
    __tablename__ = "exchange_rate_history"

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    usd_to_crc_rate = Column(Numeric(8, 4), nullable=False)  # 1 USD = usd_to_crc_rate CRC
    effective_date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    project = relationship("Project", back_populates="exchange_rate_history")
