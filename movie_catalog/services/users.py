"""User service functions for registration and authentication."""
from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.core.security import PasswordHasher
from movie_catalog.models.user import User
from movie_catalog.schemas.user import MIN_PASSWORD_LENGTH, UserCreate


class RegistrationError(ValueError):
    """Raised when a registration request is rejected."""


class DuplicateUserError(RegistrationError):
    """Raised when the username or email is already registered."""


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def find_conflicting_user(session: AsyncSession, username: str, email: str) -> User | None:
    result = await session.execute(
        select(User).where(or_(User.email == email, User.username == username)).limit(1)
    )
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, user_in: UserCreate) -> User:
    """Validate uniqueness and password rules, then persist a new user.

    Checks run in a fixed order: duplicate account, password confirmation,
    password length. The first failing rule is reported.
    """
    if await find_conflicting_user(session, user_in.username, user_in.email):
        raise DuplicateUserError("Email or username already exists")
    if user_in.password != user_in.confirm_password:
        raise RegistrationError("Passwords do not match")
    if len(user_in.password) < MIN_PASSWORD_LENGTH:
        raise RegistrationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    user = User(
        username=user_in.username,
        email=user_in.email,
        password_hash=PasswordHasher.hash(user_in.password),
    )
    session.add(user)
    await session.flush()
    return user


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user:
        return None
    if not PasswordHasher.verify(password, user.password_hash):
        return None
    return user
