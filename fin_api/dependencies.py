from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from fin_api.db.core import get_db
from fin_api.errors import TokenError
from fin_api.logging_config import get_logger
from fin_api.models.base import MAX_INTEGER, MIN_INTEGER
from fin_api.repository import SQLAccountRepository, SQLTransactionRepository, SQLUserRepository
from fin_api.security.tokens import TokenService
from fin_api.usecase import AccountUsecase, TransactionUsecase, UserUsecase

logger = get_logger(__name__)


AUTH_HEADER = "Authorization"
AUTH_SCHEME = "Bearer"


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": AUTH_SCHEME},
    )


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def authorize(request: Request, token_service: TokenService = Depends(get_token_service)) -> int:
    """
    Verify the bearer token of a protected request.

    The authenticated user id is stored on `request.state.user_id` and returned
    so routes can depend on it directly.
    """
    auth = request.headers.get(AUTH_HEADER)
    if not auth:
        raise _unauthorized()

    _, marker, token = auth.partition(AUTH_SCHEME)
    token = token.strip()
    if not marker or not token:
        raise _unauthorized()

    try:
        claims = token_service.verify(token)
    except TokenError as e:
        logger.info(f"Token validation failed: {e}")
        raise _unauthorized(str(e)) from e

    try:
        user_id = int(claims["userid"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized() from None
    if not MIN_INTEGER <= user_id <= MAX_INTEGER:
        raise _unauthorized()

    request.state.user_id = user_id
    return user_id


def _context_timeout(request: Request) -> float:
    return request.app.state.settings.context_timeout_seconds


def get_user_usecase(request: Request, db: AsyncSession = Depends(get_db)) -> UserUsecase:
    return UserUsecase(SQLUserRepository(db), request.app.state.token_service, _context_timeout(request))


def get_account_usecase(request: Request, db: AsyncSession = Depends(get_db)) -> AccountUsecase:
    return AccountUsecase(SQLAccountRepository(db), _context_timeout(request))


def get_transaction_usecase(request: Request, db: AsyncSession = Depends(get_db)) -> TransactionUsecase:
    return TransactionUsecase(
        SQLTransactionRepository(db),
        SQLAccountRepository(db),
        _context_timeout(request),
    )
