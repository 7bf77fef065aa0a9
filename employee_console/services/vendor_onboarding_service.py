"""
Vendor onboarding.

Onboarding runs three dependent steps, each committed on its own:

1. create the vendor's auth identity,
2. register the vendor profile against that identity,
3. read the profile back to get the generated vendor code.

There is no compensation. If step 2 or 3 fails the identity from step 1
stays behind; the orphaned user id is logged and the error re-raised.
"""
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from employee_console.core.exceptions import ConsoleError, NotFoundError
from employee_console.core.logging import get_logger
from employee_console.db.repositories.vendor_repository import VendorRepository
from employee_console.schemas.vendor import VendorOnboardingForm, VendorInDB, StateInDB, CityInDB
from employee_console.services.auth_service import AuthService
from employee_console.utils.identifiers import generate_vendor_code, generate_temp_password

logger = get_logger(__name__)

VENDOR_ROLE = "VENDOR"


class VendorOnboardingService:
    def __init__(self, db_session: Session, auth_service: Optional[AuthService] = None):
        self.db = db_session
        self.vendor_repo = VendorRepository(db_session)
        self.auth_service = auth_service or AuthService(db_session)

    def onboard_vendor(self, form: VendorOnboardingForm) -> VendorInDB:
        """
        Create the vendor's login and profile.

        Returns:
            The stored vendor, including its generated vendor code
        """
        password = form.temp_password or generate_temp_password()
        user = self.auth_service.sign_up(
            email=form.email,
            password=password,
            role=VENDOR_ROLE,
            full_name=form.owner_name,
        )

        try:
            self.register_vendor(user.id, form)
            vendor = self.get_vendor_by_user_id(user.id)
        except Exception:
            self.db.rollback()
            logger.error(f"Vendor onboarding failed after creating auth user {user.id}; identity left orphaned")
            raise

        if vendor is None:
            logger.error(f"Vendor profile for auth user {user.id} not readable after insert")
            raise NotFoundError("Vendor profile was not found after registration")

        logger.info(f"Onboarded vendor {vendor.vendor_id} for user {user.id}")
        return vendor

    def register_vendor(self, user_id: UUID, form: VendorOnboardingForm) -> VendorInDB:
        """Insert the vendor profile with resolved state and city names"""
        state = self.vendor_repo.get_state(form.state_id) if form.state_id else None
        city = self.vendor_repo.get_city(form.city_id) if form.city_id else None

        vendor = self.vendor_repo.create({
            "vendor_id": self._unused_vendor_code(),
            "user_id": user_id,
            "company_name": form.company_name,
            "owner_name": form.owner_name,
            "email": form.email,
            "phone": form.phone,
            "address": form.address,
            "gst_number": form.gst_number,
            "state_id": form.state_id,
            "city_id": form.city_id,
            "state_name": state.name if state else None,
            "city_name": city.name if city else None,
        })
        return VendorInDB.model_validate(vendor)

    def get_vendor_by_user_id(self, user_id: Union[UUID, str]) -> Optional[VendorInDB]:
        vendor = self.vendor_repo.get_by_user_id(UUID(str(user_id)))
        if not vendor:
            return None
        return VendorInDB.model_validate(vendor)

    def list_states(self) -> List[StateInDB]:
        return [StateInDB.model_validate(state) for state in self.vendor_repo.list_states()]

    def list_cities(self, state_id: UUID) -> List[CityInDB]:
        return [CityInDB.model_validate(city) for city in self.vendor_repo.list_cities(state_id)]

    def _unused_vendor_code(self, attempts: int = 5) -> str:
        for _ in range(attempts):
            code = generate_vendor_code()
            if not self.vendor_repo.get_by_vendor_code(code):
                return code
        raise ConsoleError("Could not allocate a vendor code")
