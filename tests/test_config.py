from datetime import timedelta

import pytest

from todo_api import config
from todo_api.config import Settings
from todo_api.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in (
        "JWT_SECRET",
        "JWT_EXPIRES_IN_SECONDS",
        "DATABASE_URL",
        "PORT",
        "HOST",
        "FRONTEND_URL",
        "BCRYPT_ROUNDS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_missing_secret_is_fatal():
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        Settings.from_env()


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    settings = Settings.from_env()
    assert settings.jwt_secret == "s3cret"
    assert settings.jwt_expires_in == timedelta(days=7)
    assert settings.database_url == "sqlite+aiosqlite:///./data.sqlite"
    assert settings.port == 3001
    assert settings.allowed_origins == ["http://localhost:5173"]
    assert settings.bcrypt_rounds == 10


def test_overrides(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("FRONTEND_URL", "https://a.example, https://b.example")
    monkeypatch.setenv("JWT_EXPIRES_IN_SECONDS", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.port == 8080
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]
    assert settings.jwt_expires_in == timedelta(seconds=60)
    assert settings.log_level == "DEBUG"
