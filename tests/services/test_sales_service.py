# tests/services/test_sales_service.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import text

from employee_console.core.exceptions import InvalidInputError, NotFoundError
from employee_console.db.models.sales import Lead, LeadPurchase, VendorPlan
from employee_console.services.sales_service import (
    SalesStatsService,
    conversion_rate,
    get_windows,
    pct_change,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def sales_service(db_session):
    return SalesStatsService(db_session, tz="UTC", clock=lambda: NOW)


@pytest.fixture
def leads(db_session):
    rows = [
        Lead(name="Current converted", status="CONVERTED", created_at=utc(2026, 10, 17, 9)),
        Lead(name="Current new", status="NEW", created_at=utc(2026, 10, 13, 15)),
        Lead(name="Previous closed", status="CLOSED", created_at=utc(2026, 10, 8, 10)),
        Lead(name="Old lead", status="NEW", created_at=utc(2026, 10, 1, 10)),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.mark.parametrize("current,previous,expected", [
    (110, 100, 10),
    (5, 0, None),
    (5, -3, None),
    (0, 4, -100),
    (1, 3, -67),
    ("abc", 100, -100),
    (Decimal("150.00"), Decimal("100.00"), 50),
])
def test_pct_change(current, previous, expected):
    assert pct_change(current, previous) == expected


def test_conversion_rate():
    assert conversion_rate(1, 3) == 33
    assert conversion_rate(2, 4) == 50
    assert conversion_rate(5, 0) == 0


def test_windows_in_utc():
    previous_start, current_start, current_end = get_windows(NOW, "UTC")

    assert current_start == utc(2026, 10, 12)
    assert previous_start == utc(2026, 10, 5)
    assert current_end == NOW


def test_windows_follow_configured_timezone():
    # 20:00 UTC is already the next day in India
    now = utc(2026, 10, 18, 20, 0)
    previous_start, current_start, current_end = get_windows(now, "Asia/Kolkata")

    assert current_start == utc(2026, 10, 12, 18, 30)
    assert previous_start == utc(2026, 10, 5, 18, 30)
    assert current_end == now


def test_unknown_timezone_falls_back_to_utc():
    _, current_start, _ = get_windows(NOW, "Mars/Olympus")
    assert current_start == utc(2026, 10, 12)


def test_stats(sales_service, leads, db_session):
    db_session.add_all([
        LeadPurchase(amount=Decimal("1500.00"), purchase_date=utc(2026, 10, 16, 8)),
        # Start of the current window belongs to the current window only
        LeadPurchase(amount=Decimal("500.00"), purchase_date=utc(2026, 10, 12)),
        LeadPurchase(amount=Decimal("1000.00"), purchase_date=utc(2026, 10, 6, 11)),
        LeadPurchase(amount=Decimal("9999.00"), purchase_date=utc(2026, 9, 1)),
    ])
    db_session.commit()

    stats = sales_service.get_stats()

    assert stats.total_leads == 4
    assert stats.conversion_rate == 50
    assert stats.new_leads_7d == 2
    assert stats.new_leads_prev_7d == 1
    assert stats.converted_7d == 1
    assert stats.converted_prev_7d == 1
    assert stats.new_leads_trend_pct == 100
    assert stats.converted_trend_pct == 0
    assert stats.revenue_7d == 2000
    assert stats.revenue_prev_7d == 1000
    assert stats.revenue_trend_pct == 100
    assert stats.revenue_7d_fmt == "₹2,000"


def test_stats_serialize_with_camel_case_keys(sales_service):
    payload = sales_service.get_stats().model_dump(by_alias=True)

    assert payload["totalLeads"] == 0
    assert payload["newLeads7d"] == 0
    assert payload["revenue7dFmt"] == "₹0"
    assert payload["newLeadsTrendPct"] is None
    assert payload["revenueTrendPct"] is None


def test_revenue_falls_back_to_created_at_on_legacy_schema(sales_service, db_session):
    db_session.execute(text("DROP TABLE lead_purchases"))
    db_session.execute(text(
        "CREATE TABLE lead_purchases (id CHAR(32) PRIMARY KEY, lead_id CHAR(32), "
        "vendor_id CHAR(32), amount NUMERIC(12, 2), created_at DATETIME)"
    ))
    for amount, created_at in [
        (700, "2026-10-15 10:00:00.000000"),
        (300, "2026-10-07 10:00:00.000000"),
    ]:
        db_session.execute(
            text("INSERT INTO lead_purchases (id, amount, created_at) VALUES (:id, :amount, :created_at)"),
            {"id": uuid.uuid4().hex, "amount": amount, "created_at": created_at},
        )
    db_session.commit()

    stats = sales_service.get_stats()

    assert stats.revenue_7d == 700
    assert stats.revenue_prev_7d == 300
    assert stats.revenue_trend_pct == 133


def test_list_leads_newest_first(sales_service, leads):
    assert [lead.name for lead in sales_service.list_leads()] == [
        "Current converted",
        "Current new",
        "Previous closed",
        "Old lead",
    ]


def test_update_lead_status_normalizes(sales_service, leads):
    lead = sales_service.update_lead_status(str(leads[1].id), "  contacted ")

    assert lead.status == "CONTACTED"
    assert lead.updated_at is not None


@pytest.mark.parametrize("lead_id,status", [("", "NEW"), (None, "NEW"), ("x", "  ")])
def test_update_lead_status_requires_id_and_status(sales_service, lead_id, status):
    with pytest.raises(InvalidInputError):
        sales_service.update_lead_status(lead_id, status)


@pytest.mark.parametrize("lead_id", [str(uuid.uuid4()), "not-a-uuid"])
def test_update_unknown_lead(sales_service, lead_id):
    with pytest.raises(NotFoundError, match="Lead not found"):
        sales_service.update_lead_status(lead_id, "CONVERTED")


def test_pricing_rules_newest_first(sales_service, db_session):
    db_session.add_all([
        VendorPlan(name="Silver", price=Decimal("999.00"), duration_days=30, created_at=utc(2026, 1, 1)),
        VendorPlan(name="Gold", price=Decimal("2999.00"), duration_days=90, created_at=utc(2026, 6, 1)),
    ])
    db_session.commit()

    rules = sales_service.list_pricing_rules()

    assert [rule["name"] for rule in rules] == ["Gold", "Silver"]


def test_pricing_rules_empty_when_table_missing(sales_service, db_session):
    db_session.execute(text("DROP TABLE vendor_plans"))
    db_session.commit()

    assert sales_service.list_pricing_rules() == []
