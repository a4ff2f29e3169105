"""
Repository Interfaces

Storage-independent persistence contracts, one per entity. Fetch methods
raise NotFound when no active row matches; list methods return the page of
rows together with the total number of matching rows.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from fin_api.models.account import Account
from fin_api.models.transaction import SummaryDaily, SummaryMonthly, Transaction
from fin_api.models.user import User


Filters = Dict[str, Any]


class UserRepository(ABC):
    """Abstract interface for user persistence"""

    @abstractmethod
    async def fetch_by_id(self, user_id: int) -> User:
        pass

    @abstractmethod
    async def fetch_by_email(self, email: str) -> User:
        pass

    @abstractmethod
    async def store(self, user: User) -> int:
        """Persist a new user and return its id"""
        pass


class AccountRepository(ABC):
    """Abstract interface for account persistence"""

    @abstractmethod
    async def fetch_all(self, filters: Filters, keyword: str,
                        limit: int, offset: int) -> Tuple[List[Account], int]:
        pass

    @abstractmethod
    async def fetch_by_id(self, account_id: int) -> Account:
        pass

    @abstractmethod
    async def store(self, account: Account) -> int:
        pass

    @abstractmethod
    async def update(self, account: Account) -> None:
        pass

    @abstractmethod
    async def delete(self, account_id: int) -> None:
        """Soft delete: flip the status to inactive"""
        pass


class TransactionRepository(ABC):
    """Abstract interface for transaction persistence and summaries"""

    @abstractmethod
    async def fetch_all(self, filters: Filters, keyword: str,
                        limit: int, offset: int) -> Tuple[List[Transaction], int]:
        pass

    @abstractmethod
    async def fetch_by_id(self, transaction_id: int) -> Transaction:
        pass

    @abstractmethod
    async def store(self, transaction: Transaction) -> int:
        pass

    @abstractmethod
    async def update(self, transaction: Transaction) -> None:
        pass

    @abstractmethod
    async def delete(self, transaction_id: int) -> None:
        pass

    @abstractmethod
    async def daily_summary(self) -> List[SummaryDaily]:
        pass

    @abstractmethod
    async def monthly_summary(self) -> List[SummaryMonthly]:
        pass
