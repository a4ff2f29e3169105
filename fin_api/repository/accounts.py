from typing import List, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fin_api.db.core import AccountDB, STATUS_ACTIVE, STATUS_INACTIVE, decode_status
from fin_api.errors import InternalServerError, NotFound
from fin_api.logging_config import get_logger
from fin_api.models.account import Account
from fin_api.repository.interfaces import AccountRepository, Filters
from fin_api.repository.query import FilterField, FilterSpec, bounded_int, build_predicates, fetch_page

logger = get_logger(__name__)


ACCOUNT_FILTERS = FilterSpec(
    fields={
        "id": FilterField(AccountDB.id, bounded_int),
        "name": FilterField(AccountDB.name),
        "type": FilterField(AccountDB.type),
        "description": FilterField(AccountDB.description),
    },
    keyword_column=AccountDB.name,
)


def to_account(row: AccountDB) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        type=row.type,
        description=row.description,
        status=decode_status(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAccountRepository(AccountRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_all(self, filters: Filters, keyword: str,
                        limit: int, offset: int) -> Tuple[List[Account], int]:
        predicates = build_predicates(ACCOUNT_FILTERS, filters, keyword)
        statement = select(AccountDB).where(AccountDB.status == STATUS_ACTIVE).order_by(AccountDB.id)
        count_statement = select(func.count(AccountDB.id)).where(AccountDB.status == STATUS_ACTIVE)

        try:
            rows, total = await fetch_page(self.session, statement, count_statement, predicates, limit, offset)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list accounts: {e}")
            raise InternalServerError() from e

        return [to_account(row) for (row,) in rows], total

    async def fetch_by_id(self, account_id: int) -> Account:
        statement = select(AccountDB).where(
            AccountDB.status == STATUS_ACTIVE,
            AccountDB.id == account_id,
        )
        try:
            row = (await self.session.execute(statement)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read account {account_id}: {e}")
            raise InternalServerError() from e

        if row is None:
            raise NotFound()
        return to_account(row)

    async def store(self, account: Account) -> int:
        db_account = AccountDB(
            name=account.name,
            type=account.type,
            description=account.description,
            status=STATUS_ACTIVE,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        try:
            self.session.add(db_account)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Account creation failed: {e}")
            raise InternalServerError() from e

        account.id = db_account.id
        return db_account.id

    async def update(self, account: Account) -> None:
        statement = (
            update(AccountDB)
            .where(AccountDB.status == STATUS_ACTIVE, AccountDB.id == account.id)
            .values(
                name=account.name,
                type=account.type,
                description=account.description,
                updated_at=account.updated_at,
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
            logger.error(f"Account update failed: {e}")
            raise InternalServerError() from e

    async def delete(self, account_id: int) -> None:
        statement = update(AccountDB).where(AccountDB.id == account_id).values(status=STATUS_INACTIVE)
        try:
            await self.session.execute(statement)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Account delete failed: {e}")
            raise InternalServerError() from e
