"""Pydantic schemas for auth identities and employee profiles."""
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class AuthUserInDB(BaseModel):
    """Schema for an auth identity (never carries the password hash)."""
    id: UUID
    email: str
    role: str
    full_name: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EmployeeInDB(BaseModel):
    """Schema for Employee as stored in DB"""
    id: UUID
    user_id: Optional[UUID] = None
    email: str
    full_name: Optional[str] = None
    role: str
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EmployeeContext(BaseModel):
    """Authenticated caller: auth identity plus resolved employee profile."""
    user: AuthUserInDB
    employee: EmployeeInDB
