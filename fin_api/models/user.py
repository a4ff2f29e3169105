from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from fin_api.models.base import CamelModel, strip_required
from fin_api.security.passwords import validate_email


# ===== USER PYDANTIC MODELS =====

class User(CamelModel):
    """A registered user; `password` always holds the digest, never plaintext"""
    id: Optional[int] = None
    email: str
    password: str
    name: str
    status: str = "active"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserRegister(CamelModel):
    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="Plaintext password")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")

    @field_validator('email')
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v)


class UserLogin(CamelModel):
    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator('email')
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email(v)


class Token(CamelModel):
    token: str
