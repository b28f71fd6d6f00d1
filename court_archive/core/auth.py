from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.core.config import Settings
from court_archive.core.db import get_db, get_app_settings
from court_archive.domains.identity.entities import Role, User
from court_archive.domains.identity.services import IdentityService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> User:
    """Зависимость для получения текущего пользователя по Bearer токену"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity_service = IdentityService(db, settings)
    user = await identity_service.get_current_user_from_token(credentials.credentials)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user


def require_roles(*roles: Role):
    """Зависимость, пропускающая только пользователей с одной из ролей"""

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        return current_user

    return checker


require_admin = require_roles(Role.ADMIN)
require_editor = require_roles(Role.ADMIN, Role.ARCHIVIST)
