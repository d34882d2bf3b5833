"""
User Entity

Represents a person who can sign in from one or more devices.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a first-party email + password identity.

    Business Rules:
    - Email must be unique across all users (stored lower-cased)
    - Password stored as bcrypt hash, never returned by the API
    - Disabled users (is_active=False) cannot log in or refresh
    - last_login_at is updated on every successful login
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: str = Field(default="", max_length=50)
    last_name: str = Field(default="", max_length=50)
    phone: Optional[str] = Field(default=None, max_length=30)

    role: UserRole = Field(default=UserRole.client)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_active", "is_active"),)
