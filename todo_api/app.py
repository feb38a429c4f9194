"""
Application factory.

Everything a request needs (settings, database engine and session factory,
password hasher, token issuer, auth service) is built here once per
application and kept on ``app.state``; nothing lives in module globals.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_api.config import Settings
from todo_api.database import create_engine, create_sessionmaker, init_models
from todo_api.exceptions import AuthenticationError, TodoApiError
from todo_api.routers import auth_router, health_router, todo_router
from todo_api.security.passwords import PasswordHasher
from todo_api.security.tokens import TokenIssuer
from todo_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models(app.state.engine)
    logger.info("Database ready")
    yield
    await app.state.engine.dispose()
    logger.info("Database connections closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Todo API", lifespan=lifespan)

    engine = create_engine(settings.database_url)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    issuer = TokenIssuer(settings.jwt_secret, expires_in=settings.jwt_expires_in)

    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)
    app.state.token_issuer = issuer
    app.state.auth_service = AuthService(hasher, issuer)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router.router, tags=["Health"])
    app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(todo_router.router, prefix="/api/todos", tags=["Todos"])
    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TodoApiError)
    async def handle_api_error(request: Request, exc: TodoApiError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"success": False, "message": "Invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})
