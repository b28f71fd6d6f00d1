"""Tests for document updates and the optional status workflow."""

import uuid

import pytest

from court_archive.domains.documents.entities import DocumentCategory, DocumentStatus
from court_archive.domains.documents.schemas import DocumentUpdate
from court_archive.domains.documents.services import DocumentService
from court_archive.domains.errors import InvalidStatusTransitionError


@pytest.fixture
async def pending(archive, add_document):
    return await add_document(archive.section_a11.id, archive.archivist.id, "طلب طلاق - ملف عائلي",
                              DocumentCategory.FAMILY, DocumentStatus.PENDING)


async def test_status_is_free_by_default(session, settings, pending):
    service = DocumentService(session, settings)

    updated = await service.update_document(pending.id, DocumentUpdate(status=DocumentStatus.ARCHIVED))

    assert updated.status == DocumentStatus.ARCHIVED


async def test_workflow_rejects_skipping_states(session, settings, pending):
    service = DocumentService(session, settings.model_copy(update={"enforce_status_workflow": True}))

    with pytest.raises(InvalidStatusTransitionError):
        await service.update_document(pending.id, DocumentUpdate(status=DocumentStatus.ARCHIVED))

    active = await service.update_document(pending.id, DocumentUpdate(status=DocumentStatus.ACTIVE))
    archived = await service.update_document(pending.id, DocumentUpdate(status=DocumentStatus.ARCHIVED))
    reopened = await service.update_document(pending.id, DocumentUpdate(status=DocumentStatus.ACTIVE))

    assert active.status == DocumentStatus.ACTIVE
    assert archived.status == DocumentStatus.ARCHIVED
    assert reopened.status == DocumentStatus.ACTIVE

    with pytest.raises(InvalidStatusTransitionError):
        await service.update_document(pending.id, DocumentUpdate(status=DocumentStatus.PENDING))


async def test_update_merges_fields_and_keeps_reference(session, settings, pending):
    service = DocumentService(session, settings)

    updated = await service.update_document(
        pending.id, DocumentUpdate(title="ملف عائلي محدث", metadata={"priority": "عالية"})
    )

    assert updated.title == "ملف عائلي محدث"
    assert updated.metadata == {"priority": "عالية"}
    assert updated.category == DocumentCategory.FAMILY
    assert updated.reference == pending.reference
    assert updated.section_id == pending.section_id
    assert updated.updated_at >= pending.updated_at


async def test_update_of_missing_document(session, settings, archive):
    service = DocumentService(session, settings)

    assert await service.update_document(uuid.uuid4(), DocumentUpdate(title="x")) is None
