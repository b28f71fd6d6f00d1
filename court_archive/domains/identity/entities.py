import enum
import uuid
from datetime import datetime
from typing import Optional

from court_archive.core.config import Settings
from court_archive.core.security import get_password_hash, verify_password
from court_archive.utils.dates import utcnow


class Role(str, enum.Enum):
    ADMIN = "admin"
    ARCHIVIST = "archivist"
    VIEWER = "viewer"


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: uuid.UUID,
        username: str,
        email: str,
        full_name: str,
        password_hash: str,
        role: Role = Role.VIEWER,
        is_active: bool = True,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.username = username
        self.email = email
        self.full_name = full_name
        self.password_hash = password_hash
        self.role = Role(role)
        self.is_active = is_active
        self.created_at = created_at or utcnow()

    def authenticate(self, password: str, settings: Optional[Settings] = None) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash, settings)

    def set_password(self, password: str, settings: Optional[Settings] = None) -> None:
        self.password_hash = get_password_hash(password, settings)

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    @property
    def can_edit_documents(self) -> bool:
        return self.role in (Role.ADMIN, Role.ARCHIVIST)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def deactivate(self) -> None:
        """Деактивация пользователя"""
        self.is_active = False

    def activate(self) -> None:
        """Активация пользователя"""
        self.is_active = True

    @classmethod
    def create_user(
        cls,
        username: str,
        email: str,
        full_name: str,
        password: str,
        role: Role = Role.VIEWER,
        is_active: bool = True,
        settings: Optional[Settings] = None
    ) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=uuid.uuid4(),
            username=username,
            email=email,
            full_name=full_name,
            password_hash=get_password_hash(password, settings),
            role=role,
            is_active=is_active
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.role.value})"
