"""
Exception hierarchy for the todo API.

Services raise these; the handlers registered in ``todo_api.main`` turn them
into ``{"success": false, "message": ...}`` responses with ``status_code``.
"""

from typing import Optional


class TodoApiError(Exception):
    """Base class for every error the API reports to clients."""

    status_code: int = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""


class ValidationError(TodoApiError):
    """Malformed or missing input."""

    status_code = 400


class AuthenticationError(TodoApiError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401


class MissingTokenError(AuthenticationError):
    def __init__(self, message: str = "Access token required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="INVALID_TOKEN")


class UnknownUserError(AuthenticationError):
    """The token is valid but its user no longer exists."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="UNKNOWN_USER")


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Same message whether the account exists or not."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class NotFoundError(TodoApiError):
    status_code = 404


class TodoNotFoundError(NotFoundError):
    """
    The todo does not exist or belongs to another user.

    The two cases are reported identically so that ids owned by other
    accounts cannot be probed.
    """

    def __init__(self, message: str = "Todo not found or access denied"):
        super().__init__(message, code="NOT_FOUND_OR_DENIED")


class InternalError(TodoApiError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")
