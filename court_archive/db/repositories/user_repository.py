from typing import Optional, List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError
import uuid

from court_archive.db.models.user import User as UserModel
from court_archive.db.models.document import Document as DocumentModel
from court_archive.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            password_hash=user.password_hash,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User with this username or email already exists")
        await self.session.refresh(db_user)
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Получение пользователя по id"""
        db_user = await self.session.get(UserModel, user_id)
        return self._to_domain(db_user) if db_user else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Получение пользователя по username"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_ids(self, user_ids) -> Dict[uuid.UUID, User]:
        if not user_ids:
            return {}
        result = await self.session.execute(
            select(UserModel).where(UserModel.id.in_(list(user_ids)))
        )
        return {db_user.id: self._to_domain(db_user) for db_user in result.scalars().all()}

    async def get_all(self) -> List[User]:
        """Получение списка пользователей"""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.created_at, UserModel.username)
        )
        return [self._to_domain(user) for user in result.scalars().all()]

    async def update(self, user_id: uuid.UUID, values: Dict[str, Any]) -> Optional[User]:
        """Частичное обновление: неуказанные поля сохраняются"""
        if "role" in values and values["role"] is not None:
            values = {**values, "role": getattr(values["role"], "value", values["role"])}

        if values:
            try:
                result = await self.session.execute(
                    update(UserModel).where(UserModel.id == user_id).values(**values)
                )
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                raise ValueError("User with this username or email already exists")
            if result.rowcount == 0:
                return None

        # identity map может держать старое состояние строки
        self.session.expire_all()
        return await self.get_by_id(user_id)

    async def delete(self, user_id: uuid.UUID) -> bool:
        """Удаление пользователя"""
        result = await self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        await self.session.commit()
        return result.rowcount > 0

    async def username_exists(self, username: str) -> bool:
        """Проверка существования username"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username)
        )
        return result.scalar_one_or_none() is not None

    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def count_documents(self, user_id: uuid.UUID) -> int:
        """Количество документов, созданных пользователем"""
        result = await self.session.execute(
            select(func.count(DocumentModel.id)).where(DocumentModel.created_by == user_id)
        )
        return result.scalar()

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            id=db_user.id,
            username=db_user.username,
            email=db_user.email,
            full_name=db_user.full_name,
            password_hash=db_user.password_hash,
            role=db_user.role,
            is_active=db_user.is_active,
            created_at=db_user.created_at
        )
