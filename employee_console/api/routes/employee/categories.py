"""Category hierarchy CRUD for head, sub and micro levels"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from employee_console.core.auth import employee_auth
from employee_console.core.dependencies import get_category_service_for_level
from employee_console.schemas.category import CategoryForm, CategoryLevel
from employee_console.services.category_service import CategoryLevelService

categories_router = APIRouter(prefix="/categories", dependencies=[Depends(employee_auth)])


@categories_router.get("/{level}")
async def list_categories(
    level: CategoryLevel,
    parent_id: Optional[str] = Query(None, description="Only children of this parent"),
    active_only: bool = Query(False, description="Only active categories"),
    category_service: CategoryLevelService = Depends(get_category_service_for_level),
):
    if active_only:
        categories = category_service.list_active_categories(parent_id)
    else:
        categories = category_service.list_categories(parent_id)
    return {"success": True, "categories": categories}


@categories_router.post("/{level}", status_code=status.HTTP_201_CREATED)
async def create_category(
    level: CategoryLevel,
    form: CategoryForm,
    category_service: CategoryLevelService = Depends(get_category_service_for_level),
):
    """
    Create a category.

    Sub and micro categories need parent_id. An image_file is uploaded and
    takes precedence over image_url; remove_image clears both.
    """
    category = category_service.create_category(form, form.parent_id)
    return {"success": True, "category": category}


@categories_router.put("/{level}/{category_id}")
async def update_category(
    level: CategoryLevel,
    category_id: str,
    form: CategoryForm,
    category_service: CategoryLevelService = Depends(get_category_service_for_level),
):
    updated_id = category_service.update_category(category_id, form)
    return {"success": True, "id": str(updated_id)}


@categories_router.delete("/{level}/{category_id}")
async def delete_category(
    level: CategoryLevel,
    category_id: str,
    category_service: CategoryLevelService = Depends(get_category_service_for_level),
):
    """Delete a category. Refused with 409 while it has children."""
    category_service.delete_category(category_id)
    return {"success": True}


@categories_router.get("/{level}/{category_id}/child-count")
async def get_child_count(
    level: CategoryLevel,
    category_id: str,
    category_service: CategoryLevelService = Depends(get_category_service_for_level),
):
    return {"success": True, "count": category_service.get_child_count(category_id)}
