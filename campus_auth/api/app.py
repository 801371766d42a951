import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from campus_auth.adapter.services.smtp_notification import SmtpNotificationService
from campus_auth.app.services.token_codec import reset_token_codec, session_token_codec
from .error import ClientError, ServerError
from .utils.session_gate import SessionGateMiddleware

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(ApplicationConfig, notifier=None) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    # Resolve codecs first: a production deploy without JWT_SECRET fails here
    session_codec = session_token_codec(ApplicationConfig)
    reset_codec = reset_token_codec(ApplicationConfig)

    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        yield
        await engine.dispose()

    app = FastAPI(title="Campus Auth API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.engine = engine
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.session_codec = session_codec
    app.state.reset_codec = reset_codec
    app.state.notifier = notifier or SmtpNotificationService.from_config(ApplicationConfig)

    app.add_middleware(
        SessionGateMiddleware,
        codec=session_codec,
        protected_paths=ApplicationConfig.PROTECTED_PATHS,
        cookie_name=ApplicationConfig.SESSION_COOKIE_NAME,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from campus_auth.api.routes import auth, dashboard, health_check, reset

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(reset.router, tags=["Password Reset"])
    app.include_router(dashboard.router, tags=["Dashboard"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
