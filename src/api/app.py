from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.logging_email_sender import LoggingEmailSender
from src.adapter.services.mailgun_email_sender import MailgunEmailSender
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_issuer import SessionIssuer
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.field:
        error_dict["field"] = exc.base_error.field
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


def build_email_sender(ApplicationConfig) -> IEmailSender:
    if ApplicationConfig.EMAIL_BACKEND == "mailgun":
        return MailgunEmailSender(
            api_key=ApplicationConfig.MAILGUN_API_KEY,
            domain=ApplicationConfig.MAILGUN_DOMAIN,
            from_email=ApplicationConfig.MAILGUN_FROM_EMAIL,
            from_name=ApplicationConfig.MAILGUN_FROM_NAME,
            base_url=ApplicationConfig.MAILGUN_BASE_URL,
        )
    return LoggingEmailSender()


def create_app(ApplicationConfig) -> FastAPI:
    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Schema bootstrap for local runs; production schemas come from migrations
        if not ApplicationConfig.is_production():
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        await engine.dispose()

    app = FastAPI(title="Tweeter Auth API", version="0.1.0", lifespan=lifespan)

    # Every collaborator is built here and handed out through src.depends
    app.state.config = ApplicationConfig
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.password_hasher = PasswordHasher()
    app.state.session_issuer = SessionIssuer(ApplicationConfig.JWT_SECRET)
    app.state.email_sender = build_email_sender(ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])
    app.include_router(admin.router, prefix=ApplicationConfig.API_PREFIX, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
