import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base

from court_archive.utils.dates import utcnow

# Базовый класс для моделей
Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, nullable=False, default=utcnow)
