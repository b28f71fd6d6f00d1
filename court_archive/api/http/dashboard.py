from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List, Dict
import uuid

from court_archive.core.auth import get_current_user
from court_archive.core.config import Settings
from court_archive.core.db import get_db, get_app_settings
from court_archive.domains.dashboard.schemas import DashboardStats, UserProgress, ProfileResponse
from court_archive.domains.dashboard.services import DashboardService
from court_archive.domains.documents.schemas import DocumentDetailsResponse
from court_archive.domains.identity.entities import User

router = APIRouter(tags=["dashboard"])


def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> DashboardService:
    return DashboardService(db, settings)


def _target_user(user_id: Optional[uuid.UUID], current_user: User) -> uuid.UUID:
    """Чужие показатели доступны только администратору"""
    if user_id is None or user_id == current_user.id:
        return current_user.id

    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions"
        )
    return user_id


def _user_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found"
    )


@router.get("/dashboard/stats", response_model=DashboardStats)
async def get_stats(
    user_id: Optional[uuid.UUID] = None,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user)
):
    """Общие счетчики по статусам (или по документам одного пользователя)"""
    if user_id is not None:
        user_id = _target_user(user_id, current_user)
    return await dashboard_service.get_stats(user_id)


@router.get("/dashboard/recent-documents", response_model=List[DocumentDetailsResponse])
async def get_recent_documents(
    limit: Optional[int] = Query(None, ge=1, le=100),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user)
):
    details = await dashboard_service.get_recent_documents(limit)
    return [DocumentDetailsResponse.from_details(item) for item in details]


@router.get("/dashboard/user-progress", response_model=UserProgress)
async def get_user_progress(
    user_id: Optional[uuid.UUID] = None,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user)
):
    progress = await dashboard_service.get_user_progress(_target_user(user_id, current_user))

    if not progress:
        raise _user_not_found()

    return progress


@router.get("/dashboard/activity-calendar", response_model=Dict[str, int])
async def get_activity_calendar(
    user_id: Optional[uuid.UUID] = None,
    days: Optional[int] = Query(None, ge=1, le=366),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user)
):
    """Число созданных документов по дням"""
    calendar = await dashboard_service.get_activity_calendar(_target_user(user_id, current_user), days=days)

    if calendar is None:
        raise _user_not_found()

    return calendar


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: Optional[uuid.UUID] = None,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user)
):
    """Профиль пользователя со статистикой"""
    profile = await dashboard_service.get_profile(_target_user(user_id, current_user))

    if not profile:
        raise _user_not_found()

    return profile
