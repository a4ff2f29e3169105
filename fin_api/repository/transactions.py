from typing import List, Optional, Tuple

from sqlalchemy import extract, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fin_api.db.core import AccountDB, TransactionDB, STATUS_ACTIVE, STATUS_INACTIVE, decode_status
from fin_api.errors import InternalServerError, NotFound
from fin_api.logging_config import get_logger
from fin_api.models.transaction import SummaryDaily, SummaryMonthly, Transaction, TransactionAccount
from fin_api.repository.interfaces import Filters, TransactionRepository
from fin_api.repository.query import FilterField, FilterSpec, bounded_int, build_predicates, fetch_page

logger = get_logger(__name__)


TRANSACTION_FILTERS = FilterSpec(
    fields={
        "id": FilterField(TransactionDB.id, bounded_int),
        "name": FilterField(TransactionDB.name),
        "type": FilterField(TransactionDB.type),
        "description": FilterField(TransactionDB.description),
        "amount_in": FilterField(TransactionDB.amount_in, float),
        "amount_out": FilterField(TransactionDB.amount_out, float),
        "account_id": FilterField(TransactionDB.account_id, bounded_int),
    },
    keyword_column=TransactionDB.name,
    aliases={
        "accountId": "account_id",
        "amountIn": "amount_in",
        "amountOut": "amount_out",
    },
)


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def to_transaction(row: TransactionDB, account: Optional[AccountDB]) -> Transaction:
    # The account is decoded on its own; an inactive account still shows up here
    linked = TransactionAccount(id=row.account_id)
    if account is not None:
        linked = TransactionAccount(
            id=account.id,
            name=account.name,
            type=account.type,
            description=account.description,
            status=decode_status(account.status),
        )

    return Transaction(
        id=row.id,
        name=row.name,
        type=row.type,
        description=row.description,
        amount_in=row.amount_in,
        amount_out=row.amount_out,
        status=decode_status(row.status),
        account=linked,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLTransactionRepository(TransactionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    def _joined(self):
        return (
            select(TransactionDB, AccountDB)
            .outerjoin(AccountDB, TransactionDB.account_id == AccountDB.id)
            .where(TransactionDB.status == STATUS_ACTIVE)
        )

    async def fetch_all(self, filters: Filters, keyword: str,
                        limit: int, offset: int) -> Tuple[List[Transaction], int]:
        predicates = build_predicates(TRANSACTION_FILTERS, filters, keyword)
        statement = self._joined().order_by(TransactionDB.id)
        count_statement = (
            select(func.count(TransactionDB.id))
            .outerjoin(AccountDB, TransactionDB.account_id == AccountDB.id)
            .where(TransactionDB.status == STATUS_ACTIVE)
        )

        try:
            rows, total = await fetch_page(self.session, statement, count_statement, predicates, limit, offset)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list transactions: {e}")
            raise InternalServerError() from e

        return [to_transaction(row, account) for row, account in rows], total

    async def fetch_by_id(self, transaction_id: int) -> Transaction:
        statement = self._joined().where(TransactionDB.id == transaction_id)
        try:
            found = (await self.session.execute(statement)).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read transaction {transaction_id}: {e}")
            raise InternalServerError() from e

        if found is None:
            raise NotFound()
        row, account = found
        return to_transaction(row, account)

    async def store(self, transaction: Transaction) -> int:
        db_transaction = TransactionDB(
            name=transaction.name,
            account_id=transaction.account_id,
            type=transaction.type,
            description=transaction.description,
            amount_in=transaction.amount_in,
            amount_out=transaction.amount_out,
            status=STATUS_ACTIVE,
            created_at=transaction.created_at,
            updated_at=transaction.updated_at,
        )
        try:
            self.session.add(db_transaction)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Transaction creation failed: {e}")
            raise InternalServerError() from e

        transaction.id = db_transaction.id
        return db_transaction.id

    async def update(self, transaction: Transaction) -> None:
        statement = (
            update(TransactionDB)
            .where(TransactionDB.status == STATUS_ACTIVE, TransactionDB.id == transaction.id)
            .values(
                name=transaction.name,
                account_id=transaction.account_id,
                type=transaction.type,
                description=transaction.description,
                amount_in=transaction.amount_in,
                amount_out=transaction.amount_out,
                updated_at=transaction.updated_at,
            )
        )
        try:
            result = await self.session.execute(statement)
            if result.rowcount != 1:
                await self.session.rollback()
                raise InternalServerError(f"Unexpected behaviour. Total affected: {result.rowcount}")
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Transaction update failed: {e}")
            raise InternalServerError() from e

    async def delete(self, transaction_id: int) -> None:
        statement = update(TransactionDB).where(TransactionDB.id == transaction_id).values(status=STATUS_INACTIVE)
        try:
            await self.session.execute(statement)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Transaction delete failed: {e}")
            raise InternalServerError() from e

    # ===== SUMMARIES =====
    # Computed over every transaction, whatever its status

    async def daily_summary(self) -> List[SummaryDaily]:
        day = extract("day", TransactionDB.created_at).label("day")
        month = extract("month", TransactionDB.created_at).label("month")
        year = extract("year", TransactionDB.created_at).label("year")
        statement = (
            select(
                func.avg(func.nullif(TransactionDB.amount_in, 0)).label("average_in"),
                func.avg(func.nullif(TransactionDB.amount_out, 0)).label("average_out"),
                day, month, year,
            )
            .group_by(day, month, year)
            .order_by(year, month, day)
        )
        try:
            rows = (await self.session.execute(statement)).all()
        except SQLAlchemyError as e:
            logger.error(f"Daily summary failed: {e}")
            raise InternalServerError() from e

        return [
            SummaryDaily(
                day=int(row.day),
                month=int(row.month),
                year=int(row.year),
                average_in=_optional_float(row.average_in),
                average_out=_optional_float(row.average_out),
            )
            for row in rows
        ]

    async def monthly_summary(self) -> List[SummaryMonthly]:
        month = extract("month", TransactionDB.created_at).label("month")
        year = extract("year", TransactionDB.created_at).label("year")
        statement = (
            select(
                func.avg(func.nullif(TransactionDB.amount_in, 0)).label("average_in"),
                func.avg(func.nullif(TransactionDB.amount_out, 0)).label("average_out"),
                month, year,
            )
            .group_by(month, year)
            .order_by(year, month)
        )
        try:
            rows = (await self.session.execute(statement)).all()
        except SQLAlchemyError as e:
            logger.error(f"Monthly summary failed: {e}")
            raise InternalServerError() from e

        return [
            SummaryMonthly(
                month=int(row.month),
                year=int(row.year),
                average_in=_optional_float(row.average_in),
                average_out=_optional_float(row.average_out),
            )
            for row in rows
        ]
