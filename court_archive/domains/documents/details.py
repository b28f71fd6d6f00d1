import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.db.repositories.document_repository import PaperRepository
from court_archive.db.repositories.location_repository import (
    BlockRepository, RowRepository, SectionRepository
)
from court_archive.db.repositories.user_repository import UserRepository
from court_archive.domains.documents.entities import Document, DocumentDetails
from court_archive.domains.errors import CorruptedReferenceError

logger = logging.getLogger(__name__)


class DocumentDetailJoiner:
    """Собирает документ с блоком, рядом, секцией, бумагами и автором"""

    def __init__(self, session: AsyncSession):
        self.block_repository = BlockRepository(session)
        self.row_repository = RowRepository(session)
        self.section_repository = SectionRepository(session)
        self.paper_repository = PaperRepository(session)
        self.user_repository = UserRepository(session)

    async def join(self, document: Document) -> DocumentDetails:
        return (await self.join_many([document]))[0]

    async def join_many(self, documents: List[Document]) -> List[DocumentDetails]:
        """Порядок результата совпадает с порядком documents"""
        if not documents:
            return []

        sections = await self.section_repository.get_by_ids({d.section_id for d in documents})
        rows = await self.row_repository.get_by_ids({s.row_id for s in sections.values()})
        blocks = await self.block_repository.get_by_ids({r.block_id for r in rows.values()})
        users = await self.user_repository.get_by_ids({d.created_by for d in documents})
        papers = await self.paper_repository.get_by_documents([d.id for d in documents])

        details = []
        for document in documents:
            section = sections.get(document.section_id)
            if section is None:
                self._corrupted(document, "section", document.section_id)

            row = rows.get(section.row_id)
            if row is None:
                self._corrupted(document, "row", section.row_id)

            block = blocks.get(row.block_id)
            if block is None:
                self._corrupted(document, "block", row.block_id)

            creator = users.get(document.created_by)
            if creator is None:
                self._corrupted(document, "user", document.created_by)

            details.append(DocumentDetails(
                document=document,
                block=block,
                row=row,
                section=section,
                papers=papers.get(document.id, []),
                creator=creator
            ))

        return details

    def _corrupted(self, document: Document, kind: str, missing_id) -> None:
        logger.error(f"Document {document.reference} ({document.id}) references missing {kind} {missing_id}")
        raise CorruptedReferenceError(document.id, kind, missing_id)
