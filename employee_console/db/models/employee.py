"""SQLAlchemy models for auth identities, sessions and employee profiles."""
from uuid import uuid4
from sqlalchemy import (
    Column, String, DateTime, Boolean, ForeignKey, JSON, Uuid, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from employee_console.db.base import Base


class AuthUser(Base):
    """Authentication identity (email + password)."""

    __tablename__ = "auth_users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, default="VENDOR")
    full_name = Column(String(255), nullable=True)
    user_metadata = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")


class AuthSession(Base):
    """Bearer session token, stored hashed."""

    __tablename__ = "auth_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("auth_users.id", ondelete="CASCADE"), nullable=False)
    token_hash = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("AuthUser", back_populates="sessions")

    __table_args__ = (
        Index("ix_auth_sessions_user_id", "user_id"),
    )


class Employee(Base):
    """Employee profile, linked to an auth identity by user_id or email."""

    __tablename__ = "employees"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="DATA_ENTRY")
    is_active = Column(Boolean, server_default="true", nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
