import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from court_archive.core.config import Settings
from court_archive.db import models  # noqa: F401  регистрирует таблицы в Base.metadata
from court_archive.db.base import Base

logger = logging.getLogger(__name__)


def casefold(value):
    return value.casefold() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record):
    # lower() в SQLite понимает только ASCII
    dbapi_connection.create_function("casefold", 1, casefold, deterministic=True)


class Database:
    """Хранилище сущностей: свой движок и фабрика сессий на каждый экземпляр.

    In-memory SQLite живет на одном общем соединении, поэтому сессии к нему
    выполняются строго по очереди. Каждый экземпляр - новое пустое хранилище.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.is_memory = settings.is_memory_database

        engine_options = {"echo": settings.database_echo}
        if self.is_memory:
            engine_options.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )

        self.engine = create_async_engine(settings.database_url, **engine_options)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _register_sqlite_functions)

        self.session_factory = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._session_lock = asyncio.Lock() if self.is_memory else None

    async def init(self) -> None:
        """Создание всех таблиц"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Entity store initialised ({self.engine.url.render_as_string(hide_password=True)})")

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._session_lock is None:
            async with self.session_factory() as session:
                yield session
            return

        async with self._session_lock:
            async with self.session_factory() as session:
                yield session


# Функция для dependency injection в FastAPI
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_section_locks(request: Request):
    return request.app.state.section_locks
