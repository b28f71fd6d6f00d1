from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime
import uuid

from court_archive.domains.documents.entities import DocumentCategory
from court_archive.domains.identity.schemas import UserResponse


class CamelModel(BaseModel):
    """Ответы дашборда отдаются в camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DashboardStats(CamelModel):
    total_cases: int
    processed_docs: int
    pending_docs: int
    archived_cases: int


class ActivityEntry(CamelModel):
    """Запись в журнале активности пользователя"""
    action: str
    document_id: uuid.UUID
    reference: str
    document_title: str
    category: DocumentCategory
    date: datetime


class UserProgress(CamelModel):
    documents_created: int
    documents_this_month: int
    documents_this_week: int
    average_processing_time: int
    last_activity: Optional[datetime] = None
    category_breakdown: Dict[DocumentCategory, float]
    recent_activity: List[ActivityEntry]


class ProfileStatistics(CamelModel):
    total_documents: int
    documents_this_month: int
    documents_this_week: int
    average_processing_time: int
    completion_rate: float
    category_progress: Dict[DocumentCategory, float]


class ProfileResponse(CamelModel):
    user: UserResponse
    statistics: ProfileStatistics
    activity_calendar: Dict[str, int]
    recent_activities: List[ActivityEntry]
