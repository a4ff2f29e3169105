from datetime import datetime
from typing import List, Tuple

from fin_api.models.transaction import SummaryDaily, SummaryMonthly, Transaction
from fin_api.repository.interfaces import AccountRepository, Filters, TransactionRepository
from fin_api.usecase.base import DEFAULT_CONTEXT_TIMEOUT, Usecase, bounded


class TransactionUsecase(Usecase):
    def __init__(self, trx_repo: TransactionRepository, account_repo: AccountRepository,
                 context_timeout: float = DEFAULT_CONTEXT_TIMEOUT):
        super().__init__(context_timeout)
        self.trx_repo = trx_repo
        self.account_repo = account_repo

    @bounded
    async def fetch_all(self, filters: Filters, keyword: str,
                        limit: int, offset: int) -> Tuple[List[Transaction], int]:
        return await self.trx_repo.fetch_all(filters, keyword, limit, offset)

    @bounded
    async def fetch_by_id(self, transaction_id: int) -> Transaction:
        return await self.trx_repo.fetch_by_id(transaction_id)

    @bounded
    async def create(self, transaction: Transaction) -> Transaction:
        """Persist a transaction against an existing account"""
        await self.account_repo.fetch_by_id(transaction.account_id)

        now = datetime.utcnow()
        transaction.created_at = now
        transaction.updated_at = now

        transaction_id = await self.trx_repo.store(transaction)
        return await self.trx_repo.fetch_by_id(transaction_id)

    @bounded
    async def update(self, transaction: Transaction) -> Transaction:
        """Both the transaction and its (possibly new) account must exist"""
        await self.trx_repo.fetch_by_id(transaction.id)
        await self.account_repo.fetch_by_id(transaction.account_id)

        transaction.updated_at = datetime.utcnow()

        await self.trx_repo.update(transaction)
        return await self.trx_repo.fetch_by_id(transaction.id)

    @bounded
    async def delete(self, transaction_id: int) -> None:
        await self.trx_repo.fetch_by_id(transaction_id)
        await self.trx_repo.delete(transaction_id)

    @bounded
    async def daily_summary(self) -> List[SummaryDaily]:
        return await self.trx_repo.daily_summary()

    @bounded
    async def monthly_summary(self) -> List[SummaryMonthly]:
        return await self.trx_repo.monthly_summary()
