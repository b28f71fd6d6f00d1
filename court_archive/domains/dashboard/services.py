import uuid
from collections import Counter
from datetime import datetime
from typing import Optional, List, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.core.config import Settings, get_settings
from court_archive.db.repositories.document_repository import DocumentRepository
from court_archive.db.repositories.user_repository import UserRepository
from court_archive.domains.dashboard.schemas import (
    DashboardStats, ActivityEntry, UserProgress, ProfileStatistics, ProfileResponse
)
from court_archive.domains.documents.details import DocumentDetailJoiner
from court_archive.domains.documents.entities import (
    Document, DocumentCategory, DocumentDetails, DocumentStatus
)
from court_archive.domains.identity.schemas import UserResponse
from court_archive.utils.dates import utcnow, start_of_month, start_of_week, trailing_window_start


def _percentage(part: int, total: int) -> float:
    if not total:
        return 0.0
    return round(part / total * 100, 1)


def average_processing_minutes(documents: List[Document]) -> int:
    """Среднее время от создания до последнего изменения у обработанных документов"""
    processed = [d for d in documents if d.status != DocumentStatus.PENDING]
    if not processed:
        return 0

    total_seconds = sum((d.updated_at - d.created_at).total_seconds() for d in processed)
    return round(total_seconds / len(processed) / 60)


def category_breakdown(documents: List[Document]) -> Dict[DocumentCategory, float]:
    """Доля активных документов в каждой категории, в процентах"""
    totals = Counter(d.category for d in documents)
    active = Counter(d.category for d in documents if d.status == DocumentStatus.ACTIVE)
    return {category: _percentage(active[category], totals[category]) for category in DocumentCategory}


class DashboardService:
    """Агрегаты для дашборда и профиля"""

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or get_settings()
        self.document_repository = DocumentRepository(session)
        self.user_repository = UserRepository(session)
        self.joiner = DocumentDetailJoiner(session)

    async def get_stats(self, user_id: Optional[uuid.UUID] = None) -> DashboardStats:
        counts = await self.document_repository.count_by_status(created_by=user_id)
        return DashboardStats(
            total_cases=sum(counts.values()),
            processed_docs=counts.get(DocumentStatus.ACTIVE.value, 0),
            pending_docs=counts.get(DocumentStatus.PENDING.value, 0),
            archived_cases=counts.get(DocumentStatus.ARCHIVED.value, 0)
        )

    async def get_recent_documents(
        self,
        limit: Optional[int] = None,
        user_id: Optional[uuid.UUID] = None
    ) -> List[DocumentDetails]:
        documents = await self.document_repository.find(
            created_by=user_id,
            limit=limit or self.settings.recent_documents_limit
        )
        return await self.joiner.join_many(documents)

    async def get_user_progress(self, user_id: uuid.UUID, now: Optional[datetime] = None) -> Optional[UserProgress]:
        """Прогресс пользователя; None, если пользователь не найден"""
        if not await self.user_repository.get_by_id(user_id):
            return None

        now = now or utcnow()
        documents = await self.document_repository.find(created_by=user_id)

        return UserProgress(
            documents_created=len(documents),
            documents_this_month=self._created_since(documents, start_of_month(now)),
            documents_this_week=self._created_since(documents, start_of_week(now)),
            average_processing_time=average_processing_minutes(documents),
            last_activity=documents[0].created_at if documents else None,
            category_breakdown=category_breakdown(documents),
            recent_activity=self._activity_log(documents)
        )

    async def get_activity_calendar(
        self,
        user_id: uuid.UUID,
        now: Optional[datetime] = None,
        days: Optional[int] = None
    ) -> Optional[Dict[str, int]]:
        """Количество созданных документов по дням за последние `days` дней; None для неизвестного пользователя"""
        if not await self.user_repository.get_by_id(user_id):
            return None

        now = now or utcnow()
        documents = await self.document_repository.find(created_by=user_id)
        return self._calendar(documents, now, days or self.settings.activity_window_days)

    async def get_profile(self, user_id: uuid.UUID, now: Optional[datetime] = None) -> Optional[ProfileResponse]:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            return None

        now = now or utcnow()
        documents = await self.document_repository.find(created_by=user_id)
        active = sum(1 for d in documents if d.status == DocumentStatus.ACTIVE)

        statistics = ProfileStatistics(
            total_documents=len(documents),
            documents_this_month=self._created_since(documents, start_of_month(now)),
            documents_this_week=self._created_since(documents, start_of_week(now)),
            average_processing_time=average_processing_minutes(documents),
            completion_rate=_percentage(active, len(documents)),
            category_progress=category_breakdown(documents)
        )

        return ProfileResponse(
            user=UserResponse.model_validate(user),
            statistics=statistics,
            activity_calendar=self._calendar(documents, now, self.settings.activity_window_days),
            recent_activities=self._activity_log(documents)
        )

    @staticmethod
    def _created_since(documents: List[Document], moment: datetime) -> int:
        return sum(1 for d in documents if d.created_at >= moment)

    @staticmethod
    def _calendar(documents: List[Document], now: datetime, days: int) -> Dict[str, int]:
        today = now.date()
        first_day = trailing_window_start(today, days)
        counts = Counter(
            d.created_at.date().isoformat()
            for d in documents
            if first_day <= d.created_at.date() <= today
        )
        return dict(sorted(counts.items()))

    def _activity_log(self, documents: List[Document]) -> List[ActivityEntry]:
        # documents already come newest first
        return [
            ActivityEntry(
                action="created",
                document_id=d.id,
                reference=d.reference,
                document_title=d.title,
                category=d.category,
                date=d.created_at
            )
            for d in documents[:self.settings.recent_activity_limit]
        ]
