from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from court_archive.core.auth import require_admin
from court_archive.core.config import Settings
from court_archive.core.db import get_db, get_app_settings
from court_archive.domains.errors import UserHasDocumentsError
from court_archive.domains.identity.entities import User
from court_archive.domains.identity.schemas import UserCreate, UserUpdate, UserResponse
from court_archive.domains.identity.services import IdentityService

router = APIRouter(prefix="/users", tags=["users"])


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found"
    )


@router.get("", response_model=List[UserResponse])
async def get_users(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Получение списка пользователей"""
    users = await IdentityService(db).list_users()
    return [UserResponse.model_validate(user) for user in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(require_admin)
):
    """Создание пользователя"""
    identity_service = IdentityService(db, settings)

    try:
        user = await identity_service.create_user(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Получение информации о пользователе"""
    user = await IdentityService(db).get_user(user_id)

    if not user:
        raise _not_found()

    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: uuid.UUID,
    update_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(require_admin)
):
    """Частичное обновление пользователя"""
    identity_service = IdentityService(db, settings)

    try:
        user = await identity_service.update_user(user_id, update_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    if not user:
        raise _not_found()

    return UserResponse.model_validate(user)


@router.post("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Деактивация пользователя"""
    user = await IdentityService(db).set_active(user_id, False)

    if not user:
        raise _not_found()

    return UserResponse.model_validate(user)


@router.post("/{user_id}/activate", response_model=UserResponse)
async def activate_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Активация пользователя"""
    user = await IdentityService(db).set_active(user_id, True)

    if not user:
        raise _not_found()

    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Удаление пользователя без документов"""
    try:
        deleted = await IdentityService(db).delete_user(user_id)
    except UserHasDocumentsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    if not deleted:
        raise _not_found()
