from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from community_hub.api.schemas.common import (
    ApiModel,
    InputModel,
    ResidenceSummary,
    RoleStrippedInput,
    TimestampedOut,
    normalize_email,
)
from community_hub.auth.models import Role
from community_hub.query.normalizer import MAX_DB_INT

# bcrypt only looks at the first 72 bytes.
_PASSWORD = {"min_length": 6, "max_length": 72}


class LoginRequest(InputModel):
    email: EmailStr
    password: str = Field(min_length=1)

    lower_email = field_validator("email")(normalize_email)


class RegisterRequest(RoleStrippedInput):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(**_PASSWORD)
    phone: str = Field(min_length=1, max_length=50)

    lower_email = field_validator("email")(normalize_email)


class ProfileUpdate(RoleStrippedInput):
    first_name: str = Field(default=None, min_length=1, max_length=100)
    last_name: str = Field(default=None, min_length=1, max_length=100)
    email: EmailStr = Field(default=None)
    password: str = Field(default=None, **_PASSWORD)
    phone: str = Field(default=None, min_length=1, max_length=50)

    lower_email = field_validator("email")(normalize_email)


class UserCreate(InputModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(**_PASSWORD)
    phone: str = Field(min_length=1, max_length=50)
    role: Role
    residence_id: int | None = Field(default=None, le=MAX_DB_INT)
    is_active: bool = True

    lower_email = field_validator("email")(normalize_email)


class UserUpdate(InputModel):
    first_name: str = Field(default=None, min_length=1, max_length=100)
    last_name: str = Field(default=None, min_length=1, max_length=100)
    email: EmailStr = Field(default=None)
    password: str = Field(default=None, **_PASSWORD)
    phone: str = Field(default=None, min_length=1, max_length=50)
    role: Role = Field(default=None)
    residence_id: int | None = Field(default=None, le=MAX_DB_INT)
    is_active: bool = Field(default=None)

    lower_email = field_validator("email")(normalize_email)


class UserOut(TimestampedOut):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    role: Role
    residence_id: int | None = None
    is_active: bool
    residence: ResidenceSummary | None = None


class AuthResponse(ApiModel):
    token: str
    user: UserOut
