from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.core.auth import get_current_user
from court_archive.core.config import Settings
from court_archive.core.db import get_db, get_app_settings
from court_archive.domains.identity.entities import User
from court_archive.domains.identity.schemas import UserLogin, UserResponse, Token
from court_archive.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """Вход пользователя"""
    identity_service = IdentityService(db, settings)

    result = await identity_service.login_user(login_data)

    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token, user = result
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Информация о текущем пользователе"""
    return UserResponse.model_validate(current_user)


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_user)):
    """Выход пользователя (токены не хранятся на сервере)"""
    return {"message": "Successfully logged out"}
