"""
FastAPI dependencies shared by the routers.

``get_current_user`` is the auth gate for every protected route: it reads
the bearer token, verifies it, and resolves the user it names. The result
is passed to handlers as an explicit ``CurrentUser`` parameter.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_db
from todo_api.exceptions import InternalError, InvalidTokenError, MissingTokenError, UnknownUserError
from todo_api.repositories.user_repo import UserRepository
from todo_api.schemas.auth import CurrentUser
from todo_api.security.tokens import TokenIssuer
from todo_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

users = UserRepository()


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        logger.debug("Rejected request without a bearer token")
        raise MissingTokenError()

    claims = issuer.verify(authorization[len(BEARER_PREFIX):])
    if claims is None:
        raise InvalidTokenError()

    try:
        user = await users.get(db, claims.user_id)
    except SQLAlchemyError:
        logger.exception("User lookup failed during authentication")
        raise InternalError()
    if user is None:
        logger.debug("Rejected token for missing user %s", claims.user_id)
        raise UnknownUserError()

    return CurrentUser.model_validate(user)
