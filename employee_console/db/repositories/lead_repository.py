# employee_console/db/repositories/lead_repository.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID
from sqlalchemy import select, table, column, func, text, DateTime, Numeric
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from employee_console.db.models.sales import Lead
from employee_console.db.schema_fallback import run_with_column_fallback, is_missing_table_error

# Date column used to place a purchase in time, preferred first
REVENUE_DATE_COLUMNS = ("purchase_date", "created_at")


class LeadRepository:
    """Repository for lead, purchase and pricing-plan queries"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, lead_id: UUID) -> Optional[Lead]:
        return self.db_session.query(Lead).filter(Lead.id == lead_id).first()

    def list(self) -> List[Lead]:
        """List all leads, newest first"""
        return self.db_session.query(Lead).order_by(Lead.created_at.desc()).all()

    def update_status(self, lead_id: UUID, status: str) -> int:
        """Set a lead's status, returning the number of rows matched"""
        updated = (
            self.db_session.query(Lead)
            .filter(Lead.id == lead_id)
            .update(
                {"status": status, "updated_at": datetime.now(timezone.utc)},
                synchronize_session=False,
            )
        )
        self.db_session.commit()
        return updated

    def count_window_stats(
        self,
        conversion_statuses: Sequence[str],
        current_start: datetime,
        current_end: datetime,
        previous_start: datetime,
        previous_end: datetime,
    ) -> Dict[str, int]:
        """
        Compute all lead counts in one aggregate statement.

        The current window includes its end, the previous window excludes it.
        """
        converted = Lead.status.in_(list(conversion_statuses))
        in_current = (Lead.created_at >= current_start) & (Lead.created_at <= current_end)
        in_previous = (Lead.created_at >= previous_start) & (Lead.created_at < previous_end)

        row = self.db_session.query(
            func.count(Lead.id).label("total_leads"),
            func.count(Lead.id).filter(converted).label("total_converted"),
            func.count(Lead.id).filter(in_current).label("new_leads_7d"),
            func.count(Lead.id).filter(in_previous).label("new_leads_prev_7d"),
            func.count(Lead.id).filter(converted & in_current).label("converted_7d"),
            func.count(Lead.id).filter(converted & in_previous).label("converted_prev_7d"),
        ).one()

        return {key: int(value or 0) for key, value in row._mapping.items()}

    def sum_revenue(self, start: datetime, end: datetime, end_inclusive: bool = True) -> float:
        """
        Sum purchase amounts in a period.

        Purchases are dated by REVENUE_DATE_COLUMNS in order; databases that
        predate purchase_date fall back to created_at.
        """
        def attempt(date_column: str) -> float:
            purchases = table(
                "lead_purchases",
                column("amount", Numeric(12, 2)),
                column(date_column, DateTime(timezone=True)),
            )
            date_col = purchases.c[date_column]
            upper = date_col <= end if end_inclusive else date_col < end
            total = self.db_session.execute(
                select(func.coalesce(func.sum(purchases.c.amount), 0)).where(date_col >= start, upper)
            ).scalar()
            return float(total or 0)

        return run_with_column_fallback(self.db_session, REVENUE_DATE_COLUMNS, attempt)

    def list_vendor_plans(self) -> List[Dict[str, Any]]:
        """
        List pricing plans, newest first.

        The vendor_plans table is optional; when it does not exist the result
        is empty.
        """
        try:
            with self.db_session.begin_nested():
                result = self.db_session.execute(
                    text("SELECT * FROM vendor_plans ORDER BY created_at DESC")
                )
                return [dict(row) for row in result.mappings()]
        except DBAPIError as e:
            if is_missing_table_error(e, "vendor_plans"):
                return []
            raise
