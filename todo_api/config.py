import os
from datetime import timedelta

from dotenv import load_dotenv
from pydantic import BaseModel

from todo_api.exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data.sqlite"
DEFAULT_TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60


class Settings(BaseModel):
    jwt_secret: str
    jwt_expires_in: timedelta = timedelta(seconds=DEFAULT_TOKEN_TTL_SECONDS)
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origins: list[str] = ["http://localhost:5173"]
    bcrypt_rounds: int = 10
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        secret = os.getenv("JWT_SECRET")
        if not secret:
            raise ConfigurationError("JWT_SECRET environment variable is required")

        origins = os.getenv("FRONTEND_URL", "http://localhost:5173").split(",")
        return cls(
            jwt_secret=secret,
            jwt_expires_in=timedelta(
                seconds=int(os.getenv("JWT_EXPIRES_IN_SECONDS", DEFAULT_TOKEN_TTL_SECONDS))
            ),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            allowed_origins=[o.strip() for o in origins if o.strip()],
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
