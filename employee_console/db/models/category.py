# employee_console/db/models/category.py
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from employee_console.db.base import Base
import uuid


class HeadCategory(Base):
    """
    Root level of the product taxonomy.
    """

    __tablename__ = "head_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text)
    image_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    sub_categories = relationship("SubCategory", back_populates="head_category")

    def __repr__(self):
        return f"<HeadCategory(id={self.id}, slug='{self.slug}')>"


class SubCategory(Base):
    """
    Second level, owned by exactly one head category.
    """

    __tablename__ = "sub_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    head_category_id = Column(
        Uuid(as_uuid=True), ForeignKey("head_categories.id"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text)
    image_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    head_category = relationship("HeadCategory", back_populates="sub_categories")
    micro_categories = relationship("MicroCategory", back_populates="sub_category")

    def __repr__(self):
        return f"<SubCategory(id={self.id}, slug='{self.slug}')>"


class MicroCategory(Base):
    """
    Leaf level, owned by exactly one sub category.

    An optional row in micro_category_meta may point at it; that table is not
    mapped here because its link column differs between schema versions.
    """

    __tablename__ = "micro_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sub_category_id = Column(
        Uuid(as_uuid=True), ForeignKey("sub_categories.id"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    image_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    sub_category = relationship("SubCategory", back_populates="micro_categories")

    def __repr__(self):
        return f"<MicroCategory(id={self.id}, slug='{self.slug}')>"
