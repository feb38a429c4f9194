import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from todo_api.exceptions import InternalError, InvalidCredentialsError, ValidationError
from todo_api.models.user import User
from todo_api.repositories.user_repo import UserRepository
from todo_api.schemas.auth import Credentials
from todo_api.security.passwords import PasswordHasher
from todo_api.security.tokens import TokenIssuer
from todo_api.security.validators import PASSWORD_REQUIREMENTS, is_valid_email, is_valid_password

logger = logging.getLogger(__name__)

# one message for every duplicate-account outcome
REGISTRATION_FAILED = "Registration failed"

# checked against when the email is unknown, so every login runs bcrypt once
DUMMY_PASSWORD = "not-a-real-password"


class AuthService:
    def __init__(self, hasher: PasswordHasher, issuer: TokenIssuer):
        self.repo = UserRepository()
        self.hasher = hasher
        self.issuer = issuer
        self._dummy_hash = hasher.hash(DUMMY_PASSWORD)

    async def register(self, db: AsyncSession, credentials: Credentials) -> tuple[User, str]:
        email, password = self._require_credentials(credentials)
        if not is_valid_password(password):
            raise ValidationError(PASSWORD_REQUIREMENTS)

        try:
            if await self.repo.email_exists(db, email):
                logger.info("Registration rejected for an existing account")
                raise ValidationError(REGISTRATION_FAILED)
            password_hash = await run_in_threadpool(self.hasher.hash, password)
            user = await self.repo.create_user(db, email, password_hash)
        except IntegrityError:
            await db.rollback()
            logger.info("Registration lost a race on a unique email")
            raise ValidationError(REGISTRATION_FAILED)
        except SQLAlchemyError:
            logger.exception("Registration failed in the store")
            raise InternalError()

        logger.info("Registered user %s", user.id)
        return user, self.issuer.issue(user.id, user.email)

    async def login(self, db: AsyncSession, credentials: Credentials) -> tuple[User, str]:
        email, password = self._require_credentials(credentials)

        try:
            user = await self.repo.get_by_email(db, email)
        except SQLAlchemyError:
            logger.exception("Login lookup failed in the store")
            raise InternalError()

        stored_hash = user.password_hash if user is not None else self._dummy_hash
        password_ok = await run_in_threadpool(self.hasher.verify, password, stored_hash)
        if user is None or not password_ok:
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        logger.info("Login: user %s", user.id)
        return user, self.issuer.issue(user.id, user.email)

    @staticmethod
    def _require_credentials(credentials: Credentials) -> tuple[str, str]:
        email, password = credentials.email, credentials.password
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be strings")
        if not is_valid_email(email):
            raise ValidationError("Invalid email format")
        return email, password
