"""
Authentication API routes
Handles registration and credential login against the identity store
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select

from codeclash.core.config import Settings
from codeclash.core.database import get_session, storage_errors
from codeclash.core.exceptions import AuthenticationError, StorageError, ValidationError
from codeclash.core.security import (
    hash_password,
    verify_password,
    validate_password_strength
)
from codeclash.core.validation import require_fields
from codeclash.models.user import (
    User,
    Profile,
    ProfileRole,
    UserRegister,
    UserLogin,
    SessionUser,
    LoginResponse,
    MessageResponse
)

logger = logging.getLogger(__name__)


async def register(
    request: Request,
    user_data: UserRegister,
    session: AsyncSession = Depends(get_session)
):
    """
    Register a new student or teacher

    - Creates the login record and its profile
    - Role must be "student" or "teacher"
    """
    require_fields(user_data, "email", "password", "full_name", "role")

    try:
        role = ProfileRole(user_data.role)
    except ValueError:
        raise ValidationError(
            "Invalid role",
            details={"allowed": [r.value for r in ProfileRole]}
        )

    is_valid, error_message = validate_password_strength(user_data.password)
    if not is_valid:
        raise ValidationError(error_message)

    email = user_data.email.strip().lower()

    async with storage_errors(session, "Failed to register user"):
        result = await session.execute(
            select(User).where(User.email == email)
        )
        if result.scalar_one_or_none():
            raise ValidationError("User already registered")

        new_user = User(
            email=email,
            password_hash=hash_password(user_data.password)
        )
        session.add(new_user)
        await session.flush()

        session.add(Profile(id=new_user.id, full_name=user_data.full_name, role=role))
        await session.commit()

    logger.info(f"Registered {role.value} user_id={new_user.id}")
    return MessageResponse(message="User registered successfully")


async def login(
    request: Request,
    credentials: UserLogin,
    session: AsyncSession = Depends(get_session)
):
    """
    Login with email and password

    - Returns the user's id, email and role
    """
    require_fields(credentials, "email", "password")
    email = credentials.email.strip().lower()

    async with storage_errors(session, "Failed to fetch user"):
        result = await session.execute(
            select(User).where(User.email == email)
        )
        user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    async with storage_errors(session, "Failed to fetch user profile"):
        profile = await session.get(Profile, user.id)

    if not profile:
        logger.error(f"User {user.id} has no profile")
        raise StorageError("Failed to fetch user profile")

    return LoginResponse(
        user=SessionUser(id=user.id, email=user.email, role=profile.role)
    )


def build_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """Auth routes with this app's rate limits applied"""
    router = APIRouter()

    router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)(
        limiter.limit(settings.RATE_LIMIT_SIGNUP)(register)
    )
    router.post("/login", response_model=LoginResponse)(
        limiter.limit(settings.RATE_LIMIT_LOGIN)(login)
    )

    return router
