# employee_console/schemas/category.py
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

from employee_console.utils.sanitizers import (
    SLUG_PATTERN,
    sanitize_category_name,
    sanitize_slug,
    sanitize_description,
    sanitize_image_url,
    is_valid_http_url,
)

DESCRIPTION_MAX_LENGTH = 500


class CategoryLevel(str, Enum):
    """Levels of the category hierarchy, parent first"""
    HEAD = "head"
    SUB = "sub"
    MICRO = "micro"


class CategoryImageFile(BaseModel):
    """Image picked in the form, sent as a base64 data URL"""
    file_name: str = Field("", description="Original file name")
    content_type: str = Field("", description="MIME type reported by the browser")
    data_url: str = Field(..., description="data:<mime>;base64,<payload> or raw base64")


class CategoryForm(BaseModel):
    """
    Category create/update form.

    Input is sanitized before validation, so a stored name or slug never
    contains characters outside the allowlists.
    """
    name: str = Field(..., description="Display name")
    slug: str = Field("", description="URL-safe identifier, derived from name when blank")
    description: Optional[str] = Field(None, description="Ignored for micro categories")
    is_active: bool = True
    image_url: Optional[str] = Field(None, description="Pasted http(s) image URL")
    image_file: Optional[CategoryImageFile] = Field(None, description="Takes precedence over image_url")
    remove_image: bool = Field(False, description="Clear the image regardless of other fields")
    parent_id: Optional[UUID] = Field(None, description="Parent id for sub and micro categories")

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, value):
        return sanitize_category_name(value or "").strip()

    @field_validator("slug", mode="before")
    @classmethod
    def clean_slug(cls, value):
        return sanitize_slug(value or "")

    @field_validator("description", mode="before")
    @classmethod
    def clean_description(cls, value):
        if value is None:
            return None
        return sanitize_description(value).strip() or None

    @field_validator("image_url", mode="before")
    @classmethod
    def clean_image_url(cls, value):
        if value is None:
            return None
        return sanitize_image_url(value) or None

    @model_validator(mode="after")
    def check_form(self):
        if not self.name:
            raise ValueError("Name is required")
        if not self.slug:
            self.slug = sanitize_slug(self.name)
        if not self.slug:
            raise ValueError("Slug is required")
        if not SLUG_PATTERN.match(self.slug):
            raise ValueError("Slug can only use lowercase letters, numbers and hyphen")
        if self.description and len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")
        if not self.image_file and self.image_url and not is_valid_http_url(self.image_url):
            raise ValueError("Please enter a valid image URL (http/https)")
        return self


class HeadCategoryInDB(BaseModel):
    """Schema for HeadCategory as stored in DB"""
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SubCategoryInDB(HeadCategoryInDB):
    """Schema for SubCategory as stored in DB"""
    head_category_id: UUID


class MicroCategoryInDB(BaseModel):
    """Schema for MicroCategory as stored in DB"""
    id: UUID
    sub_category_id: UUID
    name: str
    slug: str
    image_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
