# employee_console/db/models/sales.py
from sqlalchemy import Column, String, Text, Boolean, Integer, Numeric, DateTime, ForeignKey, Uuid, func
from employee_console.db.base import Base
import uuid


class Lead(Base):
    """
    Sales prospect. Status is free text, stored upper-cased.
    """

    __tablename__ = "leads"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String)
    email = Column(String)
    phone = Column(String)
    requirement = Column(Text)
    status = Column(String(50), nullable=False, default="NEW", server_default="NEW", index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<Lead(id={self.id}, status='{self.status}')>"


class LeadPurchase(Base):
    """
    Revenue-generating purchase of a lead by a vendor.

    Older databases only carry created_at, so revenue queries must not rely
    on purchase_date being present.
    """

    __tablename__ = "lead_purchases"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    lead_id = Column(Uuid(as_uuid=True), ForeignKey("leads.id"), nullable=True, index=True)
    vendor_id = Column(Uuid(as_uuid=True), ForeignKey("vendors.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    purchase_date = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class VendorPlan(Base):
    """Membership plan offered to vendors (pricing rules)."""

    __tablename__ = "vendor_plans"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    duration_days = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
