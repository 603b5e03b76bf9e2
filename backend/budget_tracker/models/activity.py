"""
Activity model for the tasks that make up a project.
"""
from sqlalchemy import Column, String, Date, Numeric, Text, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from budget_tracker.db.base import BaseModel
import enum


class ActivityStatus(str, enum.Enum):
    """Activity status enumeration."""
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Activity(BaseModel):
    """A unit of construction work with a planned USD budget and an actual CRC cost."""
    __tablename__ = "activities"

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    estimated_start_date = Column(Date, nullable=False, index=True)
    estimated_end_date = Column(Date, nullable=False)
    actual_start_date = Column(Date, nullable=True)
    actual_end_date = Column(Date, nullable=True)
    contractor = Column(String(200), nullable=True)
    planned_budget_usd = Column(Numeric(10, 2), nullable=False)
    actual_cost_crc = Column(Numeric(12, 2), nullable=True)  # Recorded in CRC, converted at analysis time
    status = Column(
        SQLEnum(
            ActivityStatus,
            name="activity_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=ActivityStatus.PLANNED,
        nullable=False,
    )

    # Relationships
    project = relationship("Project", back_populates="activities")
