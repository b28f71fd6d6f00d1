"""Tests for papers and cascade delete."""

import uuid
from datetime import datetime, timedelta

import pytest

from court_archive.db.repositories.document_repository import PaperRepository
from court_archive.domains.documents.entities import Paper
from court_archive.domains.documents.schemas import PaperCreate, PaperUpdate
from court_archive.domains.documents.services import DocumentService, PaperService
from court_archive.domains.errors import UnknownLocationError


@pytest.fixture
def paper_service(session):
    return PaperService(session)


@pytest.fixture
async def document(archive, add_document):
    return await add_document(archive.section_a11.id, archive.archivist.id, "قرار استئناف")


async def test_papers_are_listed_in_creation_order(session, paper_service, document):
    repository = PaperRepository(session)
    base = datetime(2024, 1, 10, 8, 0)
    for minutes, title in ((20, "شهادات الشهود"), (0, "الوثيقة الأساسية"), (10, "مرفقات القضية")):
        await repository.create(Paper.create_paper(
            document_id=document.id, title=title, created_at=base + timedelta(minutes=minutes)
        ))

    papers = await paper_service.get_papers(document.id)

    assert [paper.title for paper in papers] == ["الوثيقة الأساسية", "مرفقات القضية", "شهادات الشهود"]


async def test_paper_for_missing_document_is_rejected(paper_service, archive):
    with pytest.raises(UnknownLocationError):
        await paper_service.create_paper(PaperCreate(document_id=uuid.uuid4(), title="Orphan"))


async def test_partial_paper_update_keeps_other_fields(paper_service, document):
    paper = await paper_service.create_paper(PaperCreate(
        document_id=document.id, title="Report", content="v1", file_size=1200
    ))

    updated = await paper_service.update_paper(paper.id, PaperUpdate(content="v2"))

    assert updated.content == "v2"
    assert updated.title == "Report"
    assert updated.file_size == 1200
    assert await paper_service.update_paper(uuid.uuid4(), PaperUpdate(content="x")) is None


async def test_deleting_document_removes_its_papers(session, settings, paper_service, document):
    for i in range(3):
        await paper_service.create_paper(PaperCreate(document_id=document.id, title=f"Paper {i}"))

    document_service = DocumentService(session, settings)
    assert await document_service.delete_document(document.id) is True

    assert await document_service.get_document(document.id) is None
    assert await PaperRepository(session).get_by_document(document.id) == []
    assert await document_service.delete_document(document.id) is False
