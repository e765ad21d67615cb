"""Pydantic schemas for account forms."""
from __future__ import annotations

import re

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserCreate(BaseModel):
    username: str
    email: str
    password: str
    confirm_password: str

    @field_validator("username", mode="before")
    @classmethod
    def _check_username(cls, value: str) -> str:
        username = value.strip() if isinstance(value, str) else ""
        if not 3 <= len(username) <= 64:
            raise PydanticCustomError("account_form", "Username must be 3-64 characters")
        return username

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: str) -> str:
        email = value.strip().lower() if isinstance(value, str) else ""
        if len(email) > 255 or not _EMAIL_RE.match(email):
            raise PydanticCustomError("account_form", "Please enter a valid email")
        return email


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower() if isinstance(value, str) else value
