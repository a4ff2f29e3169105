from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fin_api.db.core import UserDB, STATUS_ACTIVE, decode_status
from fin_api.errors import Conflict, InternalServerError, NotFound
from fin_api.logging_config import get_logger
from fin_api.models.user import User
from fin_api.repository.interfaces import UserRepository

logger = get_logger(__name__)


def to_user(row: UserDB) -> User:
    return User(
        id=row.id,
        email=row.email,
        password=row.password,
        name=row.name,
        status=decode_status(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fetch_one(self, statement) -> User:
        try:
            row = (await self.session.execute(statement)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read user: {e}")
            raise InternalServerError() from e

        if row is None:
            raise NotFound()
        return to_user(row)

    async def fetch_by_id(self, user_id: int) -> User:
        return await self._fetch_one(select(UserDB).where(UserDB.id == user_id))

    async def fetch_by_email(self, email: str) -> User:
        return await self._fetch_one(select(UserDB).where(UserDB.email == email.lower()))

    async def store(self, user: User) -> int:
        db_user = UserDB(
            email=user.email.lower(),
            password=user.password,
            name=user.name,
            status=STATUS_ACTIVE,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        try:
            self.session.add(db_user)
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            await self.session.rollback()
            raise Conflict() from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"User creation failed: {e}")
            raise InternalServerError() from e

        user.id = db_user.id
        return db_user.id
