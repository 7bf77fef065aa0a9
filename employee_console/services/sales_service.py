"""Service for sales statistics, leads and pricing rules."""
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from datetime import datetime, time, timedelta
from uuid import UUID
import pytz
from sqlalchemy.orm import Session

from employee_console.core.config import settings
from employee_console.core.exceptions import InvalidInputError, NotFoundError
from employee_console.core.logging import get_logger
from employee_console.db.repositories.lead_repository import LeadRepository
from employee_console.schemas.sales import SalesStats, LeadInDB
from employee_console.utils.formatters import safe_num, round_half_up, format_inr

logger = get_logger(__name__)

CONVERSION_STATUSES = ("CONVERTED", "CLOSED")
WINDOW_DAYS = 7


def pct_change(current: Any, previous: Any) -> Optional[int]:
    """
    Whole-number percentage change from previous to current.

    Returns None when there is no positive baseline to compare against.
    """
    current = safe_num(current)
    previous = safe_num(previous)
    if previous <= 0:
        return None
    return round_half_up((current - previous) / previous * 100)


def conversion_rate(total_converted: Any, total_leads: Any) -> int:
    total_leads = safe_num(total_leads)
    if total_leads <= 0:
        return 0
    return round_half_up(safe_num(total_converted) / total_leads * 100)


def get_windows(now: datetime, tz: str = "UTC") -> Tuple[datetime, datetime, datetime]:
    """
    Compute the comparison windows.

    The current window runs from the start of the day six days ago up to now.
    The previous window is the seven days before it, ending where the current
    one starts. Day boundaries follow ``tz``; the returned datetimes are UTC.

    Returns:
        (previous_start, current_start, current_end)
    """
    try:
        timezone_obj = pytz.timezone(tz)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.warning(f"Unknown sales timezone '{tz}', using UTC")
        timezone_obj = pytz.UTC

    if now.tzinfo is None:
        now = pytz.UTC.localize(now)
    now_in_tz = now.astimezone(timezone_obj)

    first_day = now_in_tz.date() - timedelta(days=WINDOW_DAYS - 1)
    current_start = timezone_obj.localize(datetime.combine(first_day, time.min))
    previous_start = timezone_obj.localize(
        datetime.combine(first_day - timedelta(days=WINDOW_DAYS), time.min)
    )

    return (
        previous_start.astimezone(pytz.UTC),
        current_start.astimezone(pytz.UTC),
        now.astimezone(pytz.UTC),
    )


class SalesStatsService:
    """Sales dashboard data for sales staff and admins."""

    def __init__(
        self,
        db_session: Session,
        tz: Optional[str] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(pytz.UTC),
    ):
        self.lead_repo = LeadRepository(db_session)
        self.tz = tz or settings.SALES_TIMEZONE
        self.clock = clock

    def get_stats(self) -> SalesStats:
        """
        Lead, conversion and revenue figures for the last 7 days against the
        7 days before.

        Any query failure aborts the whole computation.
        """
        previous_start, current_start, current_end = get_windows(self.clock(), self.tz)

        counts = self.lead_repo.count_window_stats(
            CONVERSION_STATUSES,
            current_start=current_start,
            current_end=current_end,
            previous_start=previous_start,
            previous_end=current_start,
        )
        revenue_7d = self.lead_repo.sum_revenue(current_start, current_end, end_inclusive=True)
        revenue_prev_7d = self.lead_repo.sum_revenue(previous_start, current_start, end_inclusive=False)

        return SalesStats(
            total_leads=counts["total_leads"],
            conversion_rate=conversion_rate(counts["total_converted"], counts["total_leads"]),
            new_leads_7d=counts["new_leads_7d"],
            new_leads_prev_7d=counts["new_leads_prev_7d"],
            converted_7d=counts["converted_7d"],
            converted_prev_7d=counts["converted_prev_7d"],
            revenue_7d=revenue_7d,
            revenue_prev_7d=revenue_prev_7d,
            new_leads_trend_pct=pct_change(counts["new_leads_7d"], counts["new_leads_prev_7d"]),
            converted_trend_pct=pct_change(counts["converted_7d"], counts["converted_prev_7d"]),
            revenue_trend_pct=pct_change(revenue_7d, revenue_prev_7d),
            revenue_7d_fmt=format_inr(revenue_7d),
        )

    def list_leads(self) -> List[LeadInDB]:
        return [LeadInDB.model_validate(lead) for lead in self.lead_repo.list()]

    def update_lead_status(self, lead_id: Union[UUID, str, None], status: Optional[str]) -> LeadInDB:
        """
        Set a lead's status (trimmed, upper-cased).

        Raises:
            InvalidInputError: Blank id or status
            NotFoundError: No lead with that id
        """
        lead_text = str(lead_id or "").strip()
        normalized_status = str(status or "").strip().upper()
        if not lead_text or not normalized_status:
            raise InvalidInputError("Lead id and status are required")

        try:
            parsed_id = lead_id if isinstance(lead_id, UUID) else UUID(lead_text)
        except ValueError:
            raise NotFoundError("Lead not found")

        updated = self.lead_repo.update_status(parsed_id, normalized_status)
        if not updated:
            raise NotFoundError("Lead not found")

        logger.info(f"Lead {parsed_id} moved to {normalized_status}")
        return LeadInDB.model_validate(self.lead_repo.get_by_id(parsed_id))

    def list_pricing_rules(self) -> List[Dict[str, Any]]:
        """Vendor plans newest first; empty when the plans table is absent"""
        return self.lead_repo.list_vendor_plans()
