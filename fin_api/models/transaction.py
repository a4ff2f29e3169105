from pydantic import Field, field_validator
from typing import List, Optional, Tuple
from datetime import datetime

from fin_api.errors import BadParamInput
from fin_api.models.base import MAX_INTEGER, CamelModel, strip_required


TRANSACTION_TYPES = ("in", "out")


# ===== TRANSACTION PYDANTIC MODELS =====

class TransactionAccount(CamelModel):
    """The referenced account, denormalized onto every transaction read"""
    id: int
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class Transaction(CamelModel):
    id: Optional[int] = None
    name: str
    type: str
    description: str
    amount_in: float = 0
    amount_out: float = 0
    status: str = "active"
    account: TransactionAccount
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def account_id(self) -> int:
        return self.account.id


class TransactionRequest(CamelModel):
    """Body of both create and update; `type` decides which amount slot is filled"""
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    account_id: int = Field(..., gt=0, le=MAX_INTEGER, description="Account ID for this transaction")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v)

    def split_amount(self) -> Tuple[float, float]:
        """Return (amount_in, amount_out) for the request's type"""
        if self.type == "in":
            return self.amount, 0
        if self.type == "out":
            return 0, self.amount
        raise BadParamInput("Type should be in or out")

    def to_transaction(self, transaction_id: Optional[int] = None) -> Transaction:
        amount_in, amount_out = self.split_amount()
        return Transaction(
            id=transaction_id,
            name=self.name,
            type=self.type,
            description=self.description,
            amount_in=amount_in,
            amount_out=amount_out,
            account=TransactionAccount(id=self.account_id),
        )


class TransactionList(CamelModel):
    data: List[Transaction]
    total: int


class SummaryDaily(CamelModel):
    day: int
    month: int
    year: int
    average_in: Optional[float] = None
    average_out: Optional[float] = None


class SummaryMonthly(CamelModel):
    month: int
    year: int
    average_in: Optional[float] = None
    average_out: Optional[float] = None
