# employee_console/db/models/vendor.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from employee_console.db.base import Base
import uuid


class State(Base):
    __tablename__ = "states"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)

    cities = relationship("City", back_populates="state")


class City(Base):
    __tablename__ = "cities"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    state_id = Column(Uuid(as_uuid=True), ForeignKey("states.id"), nullable=False, index=True)
    name = Column(String, nullable=False)

    state = relationship("State", back_populates="cities")


class Vendor(Base):
    """
    Vendor profile, tied 1:1 to an auth identity.

    The identity and the profile are written separately, so an identity can
    exist without a vendor row.
    """

    __tablename__ = "vendors"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vendor_id = Column(String(32), nullable=False, unique=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("auth_users.id"), nullable=False, unique=True)
    company_name = Column(String, nullable=False)
    owner_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String(10), nullable=False)
    address = Column(Text)
    gst_number = Column(String(15))
    state_id = Column(Uuid(as_uuid=True), ForeignKey("states.id"), nullable=True)
    city_id = Column(Uuid(as_uuid=True), ForeignKey("cities.id"), nullable=True)
    state_name = Column(String)
    city_name = Column(String)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Vendor(id={self.id}, vendor_id='{self.vendor_id}')>"
