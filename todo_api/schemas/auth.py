from typing import Any

from pydantic import BaseModel


class Credentials(BaseModel):
    # left untyped so missing/blank fields get the API's own 400 messages
    email: Any = None
    password: Any = None


class UserOut(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}


class CurrentUser(UserOut):
    """Authenticated identity handed to protected handlers."""

    model_config = {"from_attributes": True, "frozen": True}


class AuthResponse(BaseModel):
    success: bool = True
    user: UserOut
    token: str


class MeResponse(BaseModel):
    success: bool = True
    user: UserOut
