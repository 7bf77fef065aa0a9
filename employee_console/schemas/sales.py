"""Pydantic schemas for sales statistics and leads."""
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class SalesStats(BaseModel):
    """Last 7 days vs the 7 days before. Serialized with camelCase keys."""
    total_leads: int = Field(0, alias="totalLeads")
    conversion_rate: int = Field(0, alias="conversionRate")
    new_leads_7d: int = Field(0, alias="newLeads7d")
    new_leads_prev_7d: int = Field(0, alias="newLeadsPrev7d")
    converted_7d: int = Field(0, alias="converted7d")
    converted_prev_7d: int = Field(0, alias="convertedPrev7d")
    revenue_7d: float = Field(0, alias="revenue7d")
    revenue_prev_7d: float = Field(0, alias="revenuePrev7d")
    new_leads_trend_pct: Optional[int] = Field(None, alias="newLeadsTrendPct")
    converted_trend_pct: Optional[int] = Field(None, alias="convertedTrendPct")
    revenue_trend_pct: Optional[int] = Field(None, alias="revenueTrendPct")
    revenue_7d_fmt: str = Field("", alias="revenue7dFmt")

    model_config = ConfigDict(populate_by_name=True)


class LeadInDB(BaseModel):
    """Schema for Lead as stored in DB"""
    id: UUID
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    requirement: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LeadStatusUpdate(BaseModel):
    status: str = Field("", description="New status, stored upper-cased")
