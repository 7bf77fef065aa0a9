from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from employee_console.core.config import settings
from employee_console.db.base import get_db_session
from employee_console.schemas.category import CategoryLevel
from employee_console.services.category_service import CategoryLevelService, get_category_service
from employee_console.services.faq_service import FaqResponder
from employee_console.services.image_service import CategoryImageService
from employee_console.services.sales_service import SalesStatsService
from employee_console.services.vendor_onboarding_service import VendorOnboardingService
from employee_console.storage.object_storage import ObjectStorage


@lru_cache()
def get_object_storage() -> ObjectStorage:
    """Storage client shared by all requests"""
    return ObjectStorage.from_settings(settings)


def get_image_service(storage: ObjectStorage = Depends(get_object_storage)) -> CategoryImageService:
    return CategoryImageService(storage)


def get_category_service_for_level(
    level: CategoryLevel,
    db: Session = Depends(get_db_session),
    image_service: CategoryImageService = Depends(get_image_service),
) -> CategoryLevelService:
    """Category service for the level in the request path"""
    return get_category_service(level, db, image_uploader=image_service)


def get_sales_service(db: Session = Depends(get_db_session)) -> SalesStatsService:
    return SalesStatsService(db)


def get_vendor_onboarding_service(db: Session = Depends(get_db_session)) -> VendorOnboardingService:
    return VendorOnboardingService(db)


def get_faq_responder() -> FaqResponder:
    return FaqResponder()
