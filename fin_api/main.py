from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fin_api.config import Settings, get_settings
from fin_api.db.core import build_engine, build_session_factory, create_tables
from fin_api.logging_config import get_logger, setup_logging
from fin_api.routers.accounts import router as accounts_router
from fin_api.routers.transactions import router as transactions_router
from fin_api.routers.users import router as users_router
from fin_api.security.tokens import TokenService

logger = get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed payloads, missing fields and non-integer params are bad input"""
    logger.error(f"BadParamInput: {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    engine = build_engine(settings.database_url, echo=settings.database_echo)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if settings.auto_create_tables:
            await create_tables(engine)
        yield
        await engine.dispose()

    app = FastAPI(title="fin-api", lifespan=lifespan)

    app.state.settings = settings
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expiry,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(users_router, prefix=settings.api_prefix)
    app.include_router(accounts_router, prefix=settings.api_prefix)
    app.include_router(transactions_router, prefix=settings.api_prefix)

    @app.get("/")
    def read_root():
        return "Server is running."

    logger.info(f"fin-api configured with routes under {settings.api_prefix}")
    return app


app = create_app()
