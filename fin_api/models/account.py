from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from fin_api.models.base import CamelModel, strip_required


# ===== ACCOUNT PYDANTIC MODELS =====

class Account(CamelModel):
    id: Optional[int] = None
    name: str
    type: str
    description: str
    status: str = "active"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccountCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Account name")
    type: str = Field(..., min_length=1, max_length=100, description="Free-form account type tag")
    description: str = Field(..., min_length=1, description="Account description")

    @field_validator('name', 'type')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return strip_required(v)


class AccountUpdate(CamelModel):
    """Update account - all fields optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)

    @field_validator('name', 'type')
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return strip_required(v) if v is not None else v


class AccountList(CamelModel):
    data: List[Account]
    total: int
