from fastapi import APIRouter, Depends

from employee_console.core.auth import employee_auth
from employee_console.core.dependencies import get_image_service
from employee_console.schemas.upload import CategoryImageUploadRequest, CategoryImageUploadResponse
from employee_console.services.image_service import CategoryImageService

uploads_router = APIRouter()


@uploads_router.post("/category-image-upload", response_model=CategoryImageUploadResponse)
async def upload_category_image(
    request: CategoryImageUploadRequest,
    context=Depends(employee_auth),
    image_service: CategoryImageService = Depends(get_image_service),
):
    """
    Store a category image and return its public URL.

    Images must be 100KB to 800KB; larger ones are refused with 413.
    """
    return image_service.upload(request)
