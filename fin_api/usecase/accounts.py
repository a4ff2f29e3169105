from datetime import datetime
from typing import List, Tuple

from fin_api.models.account import Account, AccountCreate, AccountUpdate
from fin_api.repository.interfaces import AccountRepository, Filters
from fin_api.usecase.base import DEFAULT_CONTEXT_TIMEOUT, Usecase, bounded


class AccountUsecase(Usecase):
    def __init__(self, account_repo: AccountRepository,
                 context_timeout: float = DEFAULT_CONTEXT_TIMEOUT):
        super().__init__(context_timeout)
        self.account_repo = account_repo

    @bounded
    async def fetch_all(self, filters: Filters, keyword: str,
                        limit: int, offset: int) -> Tuple[List[Account], int]:
        return await self.account_repo.fetch_all(filters, keyword, limit, offset)

    @bounded
    async def fetch_by_id(self, account_id: int) -> Account:
        return await self.account_repo.fetch_by_id(account_id)

    @bounded
    async def create(self, account_data: AccountCreate) -> Account:
        now = datetime.utcnow()
        account = Account(
            name=account_data.name,
            type=account_data.type,
            description=account_data.description,
            created_at=now,
            updated_at=now,
        )
        await self.account_repo.store(account)
        return account

    @bounded
    async def update(self, account_id: int, account_updates: AccountUpdate) -> Account:
        existing = await self.account_repo.fetch_by_id(account_id)

        # Update only the fields that are provided
        update_data = account_updates.model_dump(exclude_unset=True, exclude_none=True)
        account = existing.model_copy(update={**update_data, "updated_at": datetime.utcnow()})

        await self.account_repo.update(account)
        return await self.account_repo.fetch_by_id(account_id)

    @bounded
    async def delete(self, account_id: int) -> None:
        await self.account_repo.fetch_by_id(account_id)
        await self.account_repo.delete(account_id)
