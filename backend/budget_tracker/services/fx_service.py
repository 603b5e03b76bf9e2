"""
Foreign exchange service for a project's USD to CRC rate.
"""
from sqlalchemy.orm import Session
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List
from budget_tracker.models.exchange_rate import ExchangeRateHistory
from budget_tracker.models.project import Project
from budget_tracker.core.exceptions import ExchangeRateFetchError
from budget_tracker.db.session import commit_changes
from budget_tracker.services.project_service import get_project
import httpx
import logging
from budget_tracker.core.config import settings

logger = logging.getLogger(__name__)

BASE_CURRENCY = "USD"
TARGET_CURRENCY = "CRC"


def record_rate_change(project: Project, usd_to_crc_rate: Decimal, db: Session) -> ExchangeRateHistory:
    """
    Append a history entry and make the rate the project's current rate.

    Does not commit; the caller commits both writes together.
    """
    now = datetime.utcnow()
    entry = ExchangeRateHistory(
        project_id=project.id,
        usd_to_crc_rate=usd_to_crc_rate,
        effective_date=now,
    )
    db.add(entry)
    project.current_exchange_rate = usd_to_crc_rate
    project.updated_at = now
    return entry


def update_exchange_rate(project_id: int, usd_to_crc_rate: Decimal, db: Session) -> ExchangeRateHistory:
    """
    Set a project's current USD to CRC rate.

    The new history entry and the project's current rate are committed as one
    unit. An unchanged rate is still recorded.
    """
    return _apply_exchange_rate(get_project(project_id, db), usd_to_crc_rate, db)


def _apply_exchange_rate(project: Project, usd_to_crc_rate: Decimal, db: Session) -> ExchangeRateHistory:
    """Record and commit a rate change for an already loaded project."""
    previous_rate = project.current_exchange_rate

    entry = record_rate_change(project, usd_to_crc_rate, db)
    commit_changes(db, "update exchange rate")
    db.refresh(entry)

    logger.info(f"Project {project.id} exchange rate changed: 1 USD = {previous_rate} -> {usd_to_crc_rate} CRC")
    return entry


def get_exchange_rate_history(project_id: int, db: Session) -> List[ExchangeRateHistory]:
    """List a project's rate history, newest first. Unknown projects simply have none."""
    return db.query(ExchangeRateHistory).filter(
        ExchangeRateHistory.project_id == project_id
    ).order_by(
        ExchangeRateHistory.effective_date.desc(),
        ExchangeRateHistory.id.desc()
    ).all()


def fetch_usd_to_crc_rate() -> Decimal:
    """
    Fetch the latest USD to CRC rate from ExchangeRate-API v6.
    Returns rate in CRC (1 USD = rate CRC).

    API Documentation: https://www.exchangerate-api.com/docs/latest-rates
    """
    if not settings.FX_API_KEY:
        logger.error("FX_API_KEY is not configured. Please set it in .env file.")
        raise ExchangeRateFetchError("FX_API_KEY is required for ExchangeRate-API")

    api_url = f"{settings.FX_API_URL}/{settings.FX_API_KEY}/latest/{BASE_CURRENCY}"
    logger.info(f"Fetching latest exchange rate from ExchangeRate-API for {BASE_CURRENCY}")

    try:
        response = httpx.get(api_url, timeout=settings.FX_TIMEOUT_SECONDS)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP error with ExchangeRate-API: {e.response.status_code} - {e.response.text}")
        raise ExchangeRateFetchError(f"ExchangeRate-API HTTP error: {e.response.status_code}") from e
    except httpx.HTTPError as e:
        # Network errors, timeouts
        logger.error(f"HTTP error with ExchangeRate-API: {e}")
        raise ExchangeRateFetchError(f"ExchangeRate-API network error: {e}") from e
    except ValueError as e:
        logger.error(f"ExchangeRate-API returned a non-JSON body: {e}")
        raise ExchangeRateFetchError("ExchangeRate-API returned an unreadable response") from e

    if settings.DEBUG:
        logger.debug(f"ExchangeRate-API response: {data}")

    if not isinstance(data, dict):
        logger.error(f"ExchangeRate-API returned a non-object body: {data!r}")
        raise ExchangeRateFetchError("ExchangeRate-API returned an unexpected response")

    if data.get("result") != "success":
        error_msg = data.get("error-type", "Unknown error")
        logger.error(f"ExchangeRate-API returned error: {error_msg}")
        raise ExchangeRateFetchError(f"ExchangeRate-API error: {error_msg}")

    # Response format: {"conversion_rates": {"USD": 1, "CRC": 507.12, ...}}
    conversion_rates = data.get("conversion_rates")
    crc_rate = conversion_rates.get(TARGET_CURRENCY) if isinstance(conversion_rates, dict) else None
    if crc_rate is None:
        logger.error(f"{TARGET_CURRENCY} not found in conversion_rates")
        raise ExchangeRateFetchError(f"{TARGET_CURRENCY} rate not available in API response")

    # Stored with 4 decimal places
    try:
        rate = Decimal(str(crc_rate)).quantize(Decimal("0.0001"))
    except InvalidOperation as e:
        logger.error(f"Non-numeric rate: {crc_rate!r}")
        raise ExchangeRateFetchError(f"Invalid exchange rate: {crc_rate!r}") from e
    if not rate.is_finite() or rate <= 0:
        logger.error(f"Invalid rate: {rate}")
        raise ExchangeRateFetchError(f"Invalid exchange rate: {rate}")

    logger.info(f"Successfully fetched rate from ExchangeRate-API: 1 {BASE_CURRENCY} = {rate} {TARGET_CURRENCY}")
    return rate


def refresh_exchange_rate(project_id: int, db: Session) -> ExchangeRateHistory:
    """Fetch the latest market rate and apply it to a project."""
    # Load first so a missing project fails before the API is called
    project = get_project(project_id, db)
    rate = fetch_usd_to_crc_rate()
    return _apply_exchange_rate(project, rate, db)
