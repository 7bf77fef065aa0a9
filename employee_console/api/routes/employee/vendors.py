from uuid import UUID

from fastapi import APIRouter, Depends, status

from employee_console.core.auth import employee_auth
from employee_console.core.dependencies import get_vendor_onboarding_service
from employee_console.core.exceptions import NotFoundError
from employee_console.schemas.vendor import VendorOnboardingForm
from employee_console.services.vendor_onboarding_service import VendorOnboardingService

vendors_router = APIRouter(prefix="/vendors", dependencies=[Depends(employee_auth)])


@vendors_router.get("/states")
async def list_states(vendor_service: VendorOnboardingService = Depends(get_vendor_onboarding_service)):
    return {"success": True, "states": vendor_service.list_states()}


@vendors_router.get("/states/{state_id}/cities")
async def list_cities(
    state_id: UUID,
    vendor_service: VendorOnboardingService = Depends(get_vendor_onboarding_service),
):
    return {"success": True, "cities": vendor_service.list_cities(state_id)}


@vendors_router.post("/onboard", status_code=status.HTTP_201_CREATED)
async def onboard_vendor(
    form: VendorOnboardingForm,
    vendor_service: VendorOnboardingService = Depends(get_vendor_onboarding_service),
):
    """
    Create a vendor login and profile.

    The temporary password is never echoed back.
    """
    vendor = vendor_service.onboard_vendor(form)
    return {"success": True, "vendor_id": vendor.vendor_id, "vendor": vendor}


@vendors_router.get("/by-user/{user_id}")
async def get_vendor_by_user(
    user_id: UUID,
    vendor_service: VendorOnboardingService = Depends(get_vendor_onboarding_service),
):
    vendor = vendor_service.get_vendor_by_user_id(user_id)
    if not vendor:
        raise NotFoundError("Vendor not found")
    return {"success": True, "vendor": vendor}
