"""Sales dashboard endpoints (SALES, ADMIN and SUPERADMIN only)."""
from fastapi import APIRouter, Depends

from employee_console.core.auth import sales_auth
from employee_console.core.dependencies import get_sales_service
from employee_console.schemas.sales import LeadStatusUpdate
from employee_console.services.sales_service import SalesStatsService

sales_router = APIRouter(prefix="/sales", dependencies=[Depends(sales_auth)])


@sales_router.get("/stats")
async def get_sales_stats(sales_service: SalesStatsService = Depends(get_sales_service)):
    """
    Lead and revenue figures for the last 7 days against the 7 days before.

    Trend percentages are null when the previous period is zero.
    """
    return {"success": True, "stats": sales_service.get_stats()}


@sales_router.get("/leads")
async def list_leads(sales_service: SalesStatsService = Depends(get_sales_service)):
    return {"success": True, "leads": sales_service.list_leads()}


@sales_router.patch("/leads/{lead_id}/status")
async def update_lead_status(
    lead_id: str,
    data: LeadStatusUpdate,
    sales_service: SalesStatsService = Depends(get_sales_service),
):
    lead = sales_service.update_lead_status(lead_id, data.status)
    return {"success": True, "lead": lead}


@sales_router.get("/pricing-rules")
async def list_pricing_rules(sales_service: SalesStatsService = Depends(get_sales_service)):
    return {"success": True, "rules": sales_service.list_pricing_rules()}
