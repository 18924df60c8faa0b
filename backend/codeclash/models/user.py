"""
Identity models: User, Profile
Maps to: users, profiles tables
"""

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import UUID, uuid4
from enum import Enum


# ============================================================================
# ENUMS
# ============================================================================

class ProfileRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"


# ============================================================================
# USER MODEL
# ============================================================================

class User(SQLModel, table=True):
    """Login credentials. Profile data lives in profiles."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )


# ============================================================================
# PROFILE MODEL
# ============================================================================

class Profile(SQLModel, table=True):
    """Display name and role, keyed by the user's id"""

    __tablename__ = "profiles"

    id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    full_name: str = Field(max_length=200)
    role: ProfileRole
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )


# ============================================================================
# REQUEST/RESPONSE MODELS (Pydantic)
# ============================================================================

class UserRegister(SQLModel):
    """Registration request. Required fields are checked by the route."""
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=128)
    full_name: Optional[str] = Field(default=None, max_length=200)
    role: Optional[str] = None


class UserLogin(SQLModel):
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=128)


class SessionUser(SQLModel):
    id: UUID
    email: str
    role: ProfileRole


class LoginResponse(SQLModel):
    user: SessionUser


class MessageResponse(SQLModel):
    message: str
