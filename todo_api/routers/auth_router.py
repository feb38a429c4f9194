from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_db
from todo_api.dependencies import get_auth_service, get_current_user
from todo_api.schemas.auth import AuthResponse, Credentials, CurrentUser, MeResponse, UserOut
from todo_api.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    credentials: Credentials,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(get_auth_service),
):
    user, token = await service.register(db, credentials)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: Credentials,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(get_auth_service),
):
    user, token = await service.login(db, credentials)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.get("/me", response_model=MeResponse)
async def me(current_user: CurrentUser = Depends(get_current_user)):
    return MeResponse(user=current_user)
