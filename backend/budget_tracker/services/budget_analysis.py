"""
Budget analysis service for the project health dashboard.

All arithmetic is done on Decimal values. Risk decisions are taken on the
exact values; only the returned snapshot is rounded.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional
from sqlalchemy.orm import Session
from budget_tracker.core.config import settings
from budget_tracker.models.activity import Activity, ActivityStatus
from budget_tracker.models.project import Project
from budget_tracker.schemas.budget import BudgetAnalysis
from budget_tracker.services.activity_service import list_activities
from budget_tracker.services.project_service import get_project

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
HUNDRED = Decimal(100)


def _decimal(value) -> Decimal:
    """Coerce a stored numeric value to Decimal without float drift."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round(value: Decimal, places: int = 2) -> Decimal:
    """Round half up to a fixed number of decimal places."""
    quantize = Decimal(10) ** -places
    return value.quantize(quantize, rounding=ROUND_HALF_UP)


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    """Part as a percentage of whole, 0 when whole is not positive."""
    if whole > 0:
        return part / whole * HUNDRED
    return ZERO


def convert_crc_to_usd(amount_crc: Decimal, usd_to_crc_rate: Decimal) -> Decimal:
    """
    Convert an amount in CRC to USD.

    Args:
        amount_crc: Amount in Costa Rican colones
        usd_to_crc_rate: Exchange rate (1 USD = usd_to_crc_rate CRC)

    Returns:
        Amount in USD, or 0 when the rate cannot be used for conversion
    """
    if usd_to_crc_rate is None or usd_to_crc_rate <= 0:
        return ZERO
    return _decimal(amount_crc) / _decimal(usd_to_crc_rate)


def project_total_cost(
    total_actual_cost_usd: Decimal,
    project_completion_percentage: Decimal,
    total_planned_budget_usd: Decimal,
) -> Decimal:
    """
    Project the final cost of a project.

    Once some activities are completed and money has been spent, the cost is
    extrapolated linearly from the completion percentage. Until then the
    planned budget is the best available estimate.
    """
    if project_completion_percentage > 0 and total_actual_cost_usd > 0:
        return total_actual_cost_usd / project_completion_percentage * HUNDRED
    if total_planned_budget_usd > 0:
        return total_planned_budget_usd
    return ZERO


def calculate_budget_analysis(
    project: Project,
    activities: Iterable[Activity],
    utilization_threshold: Optional[float] = None,
    completion_threshold: Optional[float] = None,
) -> BudgetAnalysis:
    """
    Compute the budget analysis snapshot for a project and all of its activities.

    Cancelled activities still count toward the planned and actual totals but
    never toward the completed count.

    Args:
        project: The project being analysed
        activities: Every activity of the project, in any order
        utilization_threshold: Utilization percentage above which an unfinished
            project is flagged (defaults to RISK_UTILIZATION_THRESHOLD)
        completion_threshold: Completion percentage below which a heavily spent
            project is flagged (defaults to RISK_COMPLETION_THRESHOLD)
    """
    if utilization_threshold is None:
        utilization_threshold = settings.RISK_UTILIZATION_THRESHOLD
    if completion_threshold is None:
        completion_threshold = settings.RISK_COMPLETION_THRESHOLD

    activities = list(activities)
    total_budget = _decimal(project.total_budget_usd)
    rate = _decimal(project.current_exchange_rate)

    total_planned = sum((_decimal(a.planned_budget_usd) for a in activities), ZERO)
    total_actual = sum(
        (convert_crc_to_usd(a.actual_cost_crc, rate) for a in activities if a.actual_cost_crc is not None),
        ZERO,
    )
    remaining = total_budget - total_actual
    utilization = _percentage(total_actual, total_budget)

    completed_count = sum(1 for a in activities if a.status == ActivityStatus.COMPLETED)
    total_count = len(activities)
    completion = _percentage(Decimal(completed_count), Decimal(total_count))

    projected = project_total_cost(total_actual, completion, total_planned)
    projected_over = max(ZERO, projected - total_budget)

    is_risk = projected_over > 0 or (
        utilization > Decimal(str(utilization_threshold))
        and completion < Decimal(str(completion_threshold))
    )

    return BudgetAnalysis(
        project_id=project.id,
        current_exchange_rate=rate,
        total_budget_usd=_round(total_budget),
        total_planned_budget_usd=_round(total_planned),
        total_actual_cost_usd=_round(total_actual),
        remaining_budget_usd=_round(remaining),
        budget_utilization_percentage=float(_round(utilization)),
        projected_total_cost_usd=_round(projected),
        projected_over_budget_usd=_round(projected_over),
        is_over_budget_risk=is_risk,
        completed_activities_count=completed_count,
        total_activities_count=total_count,
        project_completion_percentage=float(_round(completion)),
    )


def get_budget_analysis(project_id: int, db: Session) -> BudgetAnalysis:
    """Load a project with its activities and analyse it. Raises NotFoundError if absent."""
    project = get_project(project_id, db)
    activities = list_activities(project_id, db)
    analysis = calculate_budget_analysis(project, activities)
    if analysis.is_over_budget_risk:
        logger.info(
            f"Project {project_id} flagged over budget risk: "
            f"projected {analysis.projected_total_cost_usd} USD vs budget {analysis.total_budget_usd} USD"
        )
    return analysis
