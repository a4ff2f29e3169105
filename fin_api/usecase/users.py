from datetime import datetime

from fin_api.errors import Conflict, NotFound, WrongPassword
from fin_api.models.user import User, UserLogin, UserRegister
from fin_api.repository.interfaces import UserRepository
from fin_api.security.passwords import digest_password, verify_password
from fin_api.security.tokens import TokenService
from fin_api.usecase.base import DEFAULT_CONTEXT_TIMEOUT, Usecase, bounded


class UserUsecase(Usecase):
    def __init__(self, user_repo: UserRepository, token_service: TokenService,
                 context_timeout: float = DEFAULT_CONTEXT_TIMEOUT):
        super().__init__(context_timeout)
        self.user_repo = user_repo
        self.token_service = token_service

    @bounded
    async def fetch_by_id(self, user_id: int) -> User:
        return await self.user_repo.fetch_by_id(user_id)

    @bounded
    async def register(self, registration: UserRegister) -> User:
        try:
            await self.user_repo.fetch_by_email(registration.email)
        except NotFound:
            pass
        else:
            raise Conflict()

        now = datetime.utcnow()
        user = User(
            email=registration.email,
            password=digest_password(registration.password),
            name=registration.name,
            created_at=now,
            updated_at=now,
        )
        await self.user_repo.store(user)
        return user

    @bounded
    async def login(self, credentials: UserLogin) -> str:
        try:
            existing = await self.user_repo.fetch_by_email(credentials.email)
        except NotFound:
            # Existing clients expect 409 for an unknown email
            raise Conflict() from None

        if not verify_password(credentials.password, existing.password):
            raise WrongPassword()

        return self.token_service.issue(existing.id, existing.email)
