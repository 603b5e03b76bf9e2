"""
Pydantic schemas for the budget analysis dashboard.
"""
from pydantic import BaseModel
from decimal import Decimal


class BudgetAnalysis(BaseModel):
    """Budget health snapshot for one project. Amounts are in USD."""
    project_id: int
    current_exchange_rate: Decimal  # Rate used to convert every actual CRC cost
    total_budget_usd: Decimal
    total_planned_budget_usd: Decimal  # Sum over all activities, any status
    total_actual_cost_usd: Decimal  # Actual CRC costs converted at the current rate
    remaining_budget_usd: Decimal  # Negative when already over budget
    budget_utilization_percentage: float  # Actual cost as a percentage of budget (0 when budget is 0)
    projected_total_cost_usd: Decimal
    projected_over_budget_usd: Decimal  # 0 if not projected over budget
    is_over_budget_risk: bool
    completed_activities_count: int
    total_activities_count: int
    project_completion_percentage: float  # Completed activities as a percentage of all activities
