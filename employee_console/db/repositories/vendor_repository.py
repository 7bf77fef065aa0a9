# employee_console/db/repositories/vendor_repository.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from employee_console.db.models.vendor import Vendor, State, City


class VendorRepository:
    """Repository for vendor profiles and the state/city lookups"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_user_id(self, user_id: UUID) -> Optional[Vendor]:
        """Get vendor by auth user ID"""
        return self.db_session.query(Vendor).filter(Vendor.user_id == user_id).first()

    def get_by_vendor_code(self, vendor_code: str) -> Optional[Vendor]:
        return self.db_session.query(Vendor).filter(Vendor.vendor_id == vendor_code).first()

    def create(self, values: Dict[str, Any]) -> Vendor:
        """Create a new vendor profile"""
        db_vendor = Vendor(**values)

        self.db_session.add(db_vendor)
        self.db_session.commit()
        self.db_session.refresh(db_vendor)

        return db_vendor

    def list_states(self) -> List[State]:
        return self.db_session.query(State).order_by(State.name).all()

    def list_cities(self, state_id: UUID) -> List[City]:
        return (
            self.db_session.query(City)
            .filter(City.state_id == state_id)
            .order_by(City.name)
            .all()
        )

    def get_state(self, state_id: UUID) -> Optional[State]:
        return self.db_session.query(State).filter(State.id == state_id).first()

    def get_city(self, city_id: UUID) -> Optional[City]:
        return self.db_session.query(City).filter(City.id == city_id).first()
