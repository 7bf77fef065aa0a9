"""Pydantic schemas for category image uploads."""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class CategoryImageUploadRequest(BaseModel):
    """Upload request. camelCase aliases are accepted for older console builds."""
    level: str = Field("", description="head, sub or micro")
    slug: str = Field("category", description="Slug of the category the image belongs to")
    file_name: str = Field("", alias="fileName")
    content_type: str = Field("", alias="contentType")
    data_url: str = Field("", alias="dataUrl")

    model_config = ConfigDict(populate_by_name=True)


class CategoryImageUploadResponse(BaseModel):
    success: bool = True
    bucket: str
    path: str
    public_url: Optional[str] = Field(None, alias="publicUrl")

    model_config = ConfigDict(populate_by_name=True)
