import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.core.config import Settings, get_settings
from court_archive.core.security import create_access_token, verify_token
from court_archive.db.repositories.user_repository import UserRepository
from court_archive.domains.errors import UserHasDocumentsError
from court_archive.domains.identity.entities import User
from court_archive.domains.identity.schemas import UserCreate, UserUpdate, UserLogin

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с пользователями и аутентификацией"""

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or get_settings()
        self.user_repository = UserRepository(session)

    async def create_user(self, user_data: UserCreate) -> User:
        """Создание пользователя администратором"""
        if await self.user_repository.username_exists(user_data.username):
            raise ValueError("Username already taken")

        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("Email already registered")

        user = User.create_user(
            username=user_data.username,
            email=user_data.email,
            full_name=user_data.full_name,
            password=user_data.password,
            role=user_data.role,
            is_active=user_data.is_active,
            settings=self.settings
        )

        created = await self.user_repository.create(user)
        logger.info(f"User {created.username} created with role {created.role.value}")
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_username(login_data.username)

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password, self.settings):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[Tuple[str, User]]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)

        if not user:
            logger.info(f"Failed login attempt for {login_data.username}")
            return None

        token_data = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value
        }
        logger.info(f"User {user.username} logged in")
        return create_access_token(data=token_data, settings=self.settings), user

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение пользователя из JWT токена"""
        payload = verify_token(token, self.settings)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = uuid.UUID(payload["sub"])
        except ValueError:
            return None

        return await self.user_repository.get_by_id(user_id)

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.user_repository.get_by_id(user_id)

    async def list_users(self) -> List[User]:
        return await self.user_repository.get_all()

    async def update_user(self, user_id: uuid.UUID, update_data: UserUpdate) -> Optional[User]:
        """Частичное обновление пользователя"""
        user = await self.user_repository.get_by_id(user_id)

        if not user:
            return None

        values = update_data.model_dump(exclude_unset=True)

        if values.get("username") and values["username"] != user.username:
            if await self.user_repository.username_exists(values["username"]):
                raise ValueError("Username already taken")

        if values.get("email") and values["email"] != user.email:
            if await self.user_repository.email_exists(values["email"]):
                raise ValueError("Email already registered")

        password = values.pop("password", None)
        if password:
            user.set_password(password, self.settings)
            values["password_hash"] = user.password_hash

        # None означает "не менять" для обязательных полей
        values = {key: value for key, value in values.items() if value is not None}

        return await self.user_repository.update(user_id, values)

    async def set_active(self, user_id: uuid.UUID, is_active: bool) -> Optional[User]:
        """Активация / деактивация пользователя"""
        return await self.user_repository.update(user_id, {"is_active": is_active})

    async def delete_user(self, user_id: uuid.UUID) -> bool:
        """Удаление пользователя без документов"""
        if not await self.user_repository.get_by_id(user_id):
            return False

        document_count = await self.user_repository.count_documents(user_id)
        if document_count:
            raise UserHasDocumentsError(user_id, document_count)

        deleted = await self.user_repository.delete(user_id)
        if deleted:
            logger.info(f"User {user_id} deleted")
        return deleted
