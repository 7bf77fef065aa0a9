"""Pydantic schemas for vendor onboarding."""
import re
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from employee_console.utils.sanitizers import (
    sanitize_company_name,
    sanitize_owner_name,
    sanitize_email,
    sanitize_phone,
    sanitize_gst,
    sanitize_address,
)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


class VendorOnboardingForm(BaseModel):
    """Internal vendor onboarding form."""
    company_name: str = Field(..., description="Registered business name")
    owner_name: str = Field(..., description="Owner full name")
    email: str = Field(..., description="Login email for the vendor account")
    phone: str = Field(..., description="10 digit business phone")
    address: Optional[str] = None
    state_id: Optional[UUID] = None
    city_id: Optional[UUID] = None
    gst_number: Optional[str] = None
    temp_password: Optional[str] = Field(None, description="Generated when blank")

    @field_validator("company_name", mode="before")
    @classmethod
    def clean_company_name(cls, value):
        return sanitize_company_name(value or "").strip()

    @field_validator("owner_name", mode="before")
    @classmethod
    def clean_owner_name(cls, value):
        return sanitize_owner_name(value or "").strip()

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, value):
        return sanitize_email(value or "")

    @field_validator("phone", mode="before")
    @classmethod
    def clean_phone(cls, value):
        return sanitize_phone(value or "")

    @field_validator("address", mode="before")
    @classmethod
    def clean_address(cls, value):
        if value is None:
            return None
        return sanitize_address(value).strip() or None

    @field_validator("gst_number", mode="before")
    @classmethod
    def clean_gst(cls, value):
        if value is None:
            return None
        return sanitize_gst(value) or None

    @field_validator("state_id", "city_id", "temp_password", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_required(self):
        if not self.company_name:
            raise ValueError("Company name is required")
        if not self.owner_name:
            raise ValueError("Owner name is required")
        if not EMAIL_PATTERN.match(self.email):
            raise ValueError("A valid email is required")
        if not PHONE_PATTERN.match(self.phone):
            raise ValueError("Phone must be 10 digits")
        return self


class VendorInDB(BaseModel):
    """Schema for Vendor as stored in DB"""
    id: UUID
    vendor_id: str
    user_id: UUID
    company_name: str
    owner_name: str
    email: str
    phone: str
    address: Optional[str] = None
    gst_number: Optional[str] = None
    state_id: Optional[UUID] = None
    city_id: Optional[UUID] = None
    state_name: Optional[str] = None
    city_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class StateInDB(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class CityInDB(BaseModel):
    id: UUID
    state_id: UUID
    name: str

    model_config = {"from_attributes": True}
