"""Tests for dashboard aggregates and user progress."""

import uuid
from datetime import datetime, timedelta

import pytest

from court_archive.domains.dashboard.services import DashboardService
from court_archive.domains.documents.entities import DocumentCategory, DocumentStatus

# Wednesday; the week started on Sunday 2024-05-12
NOW = datetime(2024, 5, 15, 12, 0)


@pytest.fixture
def dashboard_service(session, settings):
    return DashboardService(session, settings)


@pytest.fixture
async def history(archive, add_document):
    """Four documents by the archivist spread over several months."""
    archivist = archive.archivist.id
    section = archive.section_a11.id

    def at(month, day, hour=10):
        return datetime(2024, month, day, hour, 0)

    return [
        await add_document(section, archivist, "Old civil case", DocumentCategory.CIVIL,
                           DocumentStatus.ACTIVE, created_at=at(2, 1), updated_at=at(2, 1)),
        await add_document(section, archivist, "April judgment", DocumentCategory.LEGAL,
                           DocumentStatus.ARCHIVED, created_at=at(4, 20), updated_at=at(4, 20) + timedelta(minutes=90)),
        await add_document(section, archivist, "May hearing", DocumentCategory.LEGAL,
                           DocumentStatus.ACTIVE, created_at=at(5, 3), updated_at=at(5, 3) + timedelta(minutes=30)),
        await add_document(section, archivist, "Fresh complaint", DocumentCategory.CIVIL,
                           DocumentStatus.PENDING, created_at=at(5, 14)),
    ]


async def test_global_stats(dashboard_service, archive, add_document):
    statuses = [DocumentStatus.ACTIVE] * 6 + [DocumentStatus.PENDING] * 3 + [DocumentStatus.ARCHIVED]
    for status in statuses:
        await add_document(archive.section_a12.id, archive.admin.id, status=status)

    stats = await dashboard_service.get_stats()

    assert stats.total_cases == 10
    assert stats.processed_docs == 6
    assert stats.pending_docs == 3
    assert stats.archived_cases == 1


async def test_stats_on_empty_store(dashboard_service, archive):
    stats = await dashboard_service.get_stats()

    assert stats.model_dump(by_alias=True) == {
        "totalCases": 0, "processedDocs": 0, "pendingDocs": 0, "archivedCases": 0
    }


async def test_stats_for_one_creator(dashboard_service, archive, history, add_document):
    await add_document(archive.section_b11.id, archive.admin.id)

    stats = await dashboard_service.get_stats(archive.archivist.id)

    assert stats.total_cases == 4
    assert stats.processed_docs == 2


async def test_user_progress(dashboard_service, archive, history):
    progress = await dashboard_service.get_user_progress(archive.archivist.id, now=NOW)

    assert progress.documents_created == 4
    assert progress.documents_this_month == 2
    assert progress.documents_this_week == 1
    # (0 + 90 + 30) / 3 minutes, pending documents excluded
    assert progress.average_processing_time == 40
    assert progress.last_activity == datetime(2024, 5, 14, 10, 0)
    assert progress.category_breakdown[DocumentCategory.LEGAL] == 50.0
    assert progress.category_breakdown[DocumentCategory.CIVIL] == 50.0
    assert progress.category_breakdown[DocumentCategory.FAMILY] == 0.0
    assert [entry.document_title for entry in progress.recent_activity] == [
        "Fresh complaint", "May hearing", "April judgment", "Old civil case"
    ]
    assert {entry.action for entry in progress.recent_activity} == {"created"}


async def test_user_without_documents(dashboard_service, archive, history):
    progress = await dashboard_service.get_user_progress(archive.admin.id, now=NOW)

    assert progress.documents_created == 0
    assert progress.average_processing_time == 0
    assert progress.last_activity is None
    assert set(progress.category_breakdown.values()) == {0.0}
    assert progress.recent_activity == []


async def test_activity_calendar_uses_trailing_window(dashboard_service, archive, history):
    calendar = await dashboard_service.get_activity_calendar(archive.archivist.id, now=NOW)

    # 2024-02-01 falls outside the 90 days ending on 2024-05-15
    assert calendar == {"2024-04-20": 1, "2024-05-03": 1, "2024-05-14": 1}

    short = await dashboard_service.get_activity_calendar(archive.archivist.id, now=NOW, days=7)
    assert short == {"2024-05-14": 1}


async def test_profile(dashboard_service, archive, history):
    profile = await dashboard_service.get_profile(archive.archivist.id, now=NOW)

    assert profile.user.username == "archivist"
    assert profile.statistics.total_documents == 4
    assert profile.statistics.completion_rate == 50.0
    assert profile.statistics.documents_this_week == 1
    assert len(profile.activity_calendar) == 3
    assert profile.recent_activities[0].reference == "A.1.1.4"


async def test_profile_of_unknown_user(dashboard_service, archive):
    assert await dashboard_service.get_profile(uuid.uuid4(), now=NOW) is None
    assert await dashboard_service.get_user_progress(uuid.uuid4(), now=NOW) is None
    assert await dashboard_service.get_activity_calendar(uuid.uuid4(), now=NOW) is None


async def test_recent_documents_are_joined_and_limited(dashboard_service, archive, history):
    recent = await dashboard_service.get_recent_documents(limit=2)

    assert [item.document.title for item in recent] == ["Fresh complaint", "May hearing"]
    assert recent[0].block.label == "A"
