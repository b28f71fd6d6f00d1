import logging
import uuid
from typing import Optional, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.core.config import Settings, get_settings
from court_archive.db.repositories.document_repository import DocumentRepository, PaperRepository
from court_archive.domains.documents.details import DocumentDetailJoiner
from court_archive.domains.documents.entities import (
    Document, DocumentDetails, Paper, can_transition
)
from court_archive.domains.documents.references import ReferenceAllocator, SectionLocks
from court_archive.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentFilters, PaperCreate, PaperUpdate
)
from court_archive.domains.errors import InvalidStatusTransitionError, UnknownLocationError
from court_archive.domains.locations.services import HierarchyResolver
from court_archive.utils.dates import utcnow

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(
        self,
        session: AsyncSession,
        settings: Optional[Settings] = None,
        section_locks: Optional[SectionLocks] = None
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.section_locks = section_locks or SectionLocks()
        self.document_repository = DocumentRepository(session)
        self.allocator = ReferenceAllocator(session)
        self.resolver = HierarchyResolver(session)
        self.joiner = DocumentDetailJoiner(session)

    async def create_document(self, document_data: DocumentCreate, created_by: uuid.UUID) -> Document:
        """Создание документа со следующей ссылкой в секции"""
        async with self.section_locks.for_section(document_data.section_id):
            reference = await self.allocator.allocate(document_data.section_id)

            document = Document.create_document(
                section_id=document_data.section_id,
                reference=reference,
                title=document_data.title,
                category=document_data.category,
                status=document_data.status,
                metadata=document_data.metadata,
                created_by=created_by
            )

            try:
                created = await self.document_repository.create(document, commit=False)
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                raise ValueError(f"Reference {reference} is already taken")

        logger.info(f"Document {created.reference} created by {created_by}")
        return created

    async def get_document(self, document_id: uuid.UUID) -> Optional[DocumentDetails]:
        """Получение документа со всеми связями"""
        document = await self.document_repository.get_by_id(document_id)
        if not document:
            return None
        return await self.joiner.join(document)

    async def update_document(self, document_id: uuid.UUID, update_data: DocumentUpdate) -> Optional[Document]:
        """Частичное обновление документа"""
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            return None

        values = {
            key: value
            for key, value in update_data.model_dump(exclude_unset=True).items()
            if value is not None
        }

        requested = values.get("status")
        if (
            requested is not None
            and self.settings.enforce_status_workflow
            and not can_transition(document.status, requested)
        ):
            raise InvalidStatusTransitionError(document.status.value, requested.value)

        values["updated_at"] = utcnow()
        return await self.document_repository.update(document_id, values)

    async def delete_document(self, document_id: uuid.UUID) -> bool:
        """Удаление документа и его бумаг"""
        deleted = await self.document_repository.delete(document_id)
        if deleted:
            logger.info(f"Document {document_id} deleted")
        return deleted

    async def list_documents(
        self,
        query: Optional[str] = None,
        filters: Optional[DocumentFilters] = None
    ) -> List[DocumentDetails]:
        """Поиск по подстроке и фильтры (AND), новые документы первыми"""
        filters = filters or DocumentFilters()
        query = query.strip() if query else None

        section_ids = None
        if filters.has_location:
            section_ids = await self.resolver.resolve(
                block_id=filters.block_id,
                row_id=filters.row_id,
                section_id=filters.section_id
            )

        documents = await self.document_repository.find(
            query=query,
            section_ids=section_ids,
            category=filters.category,
            status=filters.status,
            created_by=filters.created_by
        )
        return await self.joiner.join_many(documents)

    async def get_documents_by_section(self, section_id: uuid.UUID) -> List[DocumentDetails]:
        return await self.list_documents(filters=DocumentFilters(section_id=section_id))


class PaperService:
    """Сервис для работы с бумагами документа"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.paper_repository = PaperRepository(session)
        self.document_repository = DocumentRepository(session)

    async def get_papers(self, document_id: uuid.UUID) -> List[Paper]:
        return await self.paper_repository.get_by_document(document_id)

    async def create_paper(self, paper_data: PaperCreate) -> Paper:
        if not await self.document_repository.get_by_id(paper_data.document_id):
            raise UnknownLocationError("document", paper_data.document_id)

        paper = Paper.create_paper(
            document_id=paper_data.document_id,
            **paper_data.model_dump(exclude={"document_id"})
        )
        return await self.paper_repository.create(paper)

    async def update_paper(self, paper_id: uuid.UUID, update_data: PaperUpdate) -> Optional[Paper]:
        values = update_data.model_dump(exclude_unset=True)
        if values.get("title", "") is None:
            values.pop("title")

        if not values:
            return await self.paper_repository.get_by_id(paper_id)

        return await self.paper_repository.update(paper_id, values)

    async def delete_paper(self, paper_id: uuid.UUID) -> bool:
        return await self.paper_repository.delete(paper_id)
