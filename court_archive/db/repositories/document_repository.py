from typing import Optional, List, Dict, Any, Iterable, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import IntegrityError
import uuid

from court_archive.db.models.document import Document as DocumentModel, Paper as PaperModel

if TYPE_CHECKING:
    from court_archive.domains.documents.entities import Document, Paper


def _like_pattern(query: str) -> str:
    """Подстрока для ILIKE с экранированием % и _"""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _column_values(values: Dict[str, Any]) -> Dict[Any, Any]:
    """Ключи доменной сущности -> атрибуты модели, enum -> строка"""
    column_values = {}
    for key, value in values.items():
        attribute = "metadata_" if key == "metadata" else key
        column_values[getattr(DocumentModel, attribute)] = getattr(value, "value", value)
    return column_values


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document", commit: bool = True) -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            id=document.id,
            section_id=document.section_id,
            reference=document.reference,
            title=document.title,
            category=document.category.value,
            metadata_=document.metadata,
            status=document.status.value,
            created_by=document.created_by,
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        if commit:
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                raise ValueError(f"Reference {document.reference} is already taken")
        else:
            await self.session.flush()
        return self._to_domain(db_document)

    async def get_by_id(self, document_id: uuid.UUID) -> Optional["Document"]:
        """Получение документа по id"""
        db_document = await self.session.get(DocumentModel, document_id)
        return self._to_domain(db_document) if db_document else None

    async def find(
        self,
        query: Optional[str] = None,
        section_ids: Optional[Iterable[uuid.UUID]] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        created_by: Optional[uuid.UUID] = None,
        limit: Optional[int] = None
    ) -> List["Document"]:
        """Поиск документов; все условия объединяются через AND, новые - первыми"""
        stmt = select(DocumentModel)

        if query:
            stmt = stmt.where(self._search_clause(query))

        if section_ids is not None:
            section_ids = list(section_ids)
            if not section_ids:
                return []
            stmt = stmt.where(DocumentModel.section_id.in_(section_ids))

        if category:
            stmt = stmt.where(DocumentModel.category == getattr(category, "value", category))

        if status:
            stmt = stmt.where(DocumentModel.status == getattr(status, "value", status))

        if created_by:
            stmt = stmt.where(DocumentModel.created_by == created_by)

        stmt = stmt.order_by(DocumentModel.created_at.desc(), DocumentModel.reference.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_domain(doc) for doc in result.scalars().all()]

    def _search_clause(self, query: str):
        """Подстрока без учета регистра в названии, ссылке или категории"""
        columns = (DocumentModel.title, DocumentModel.reference, DocumentModel.category)

        if self.session.get_bind().dialect.name == "sqlite":
            # casefold регистрируется в core.db при подключении
            pattern = _like_pattern(query.casefold())
            return or_(*(func.casefold(column).like(pattern, escape="\\") for column in columns))

        pattern = _like_pattern(query)
        return or_(*(column.ilike(pattern, escape="\\") for column in columns))

    async def update(self, document_id: uuid.UUID, values: Dict[str, Any]) -> Optional["Document"]:
        """Частичное обновление документа"""
        result = await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(_column_values(values))
        )
        await self.session.commit()

        if result.rowcount == 0:
            return None

        self.session.expire_all()
        return await self.get_by_id(document_id)

    async def delete(self, document_id: uuid.UUID) -> bool:
        """Удаление документа вместе с его бумагами"""
        await self.session.execute(delete(PaperModel).where(PaperModel.document_id == document_id))
        result = await self.session.execute(delete(DocumentModel).where(DocumentModel.id == document_id))
        await self.session.commit()
        return result.rowcount > 0

    async def count_by_status(self, created_by: Optional[uuid.UUID] = None) -> Dict[str, int]:
        """Количество документов по каждому статусу"""
        stmt = select(DocumentModel.status, func.count(DocumentModel.id)).group_by(DocumentModel.status)
        if created_by:
            stmt = stmt.where(DocumentModel.created_by == created_by)

        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from court_archive.domains.documents.entities import Document

        return Document(
            id=db_document.id,
            section_id=db_document.section_id,
            reference=db_document.reference,
            title=db_document.title,
            category=db_document.category,
            status=db_document.status,
            metadata=dict(db_document.metadata_ or {}),
            created_by=db_document.created_by,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )


class PaperRepository:
    """Репозиторий для работы с бумагами документа"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, paper: "Paper", commit: bool = True) -> "Paper":
        db_paper = PaperModel(
            id=paper.id,
            document_id=paper.document_id,
            title=paper.title,
            content=paper.content,
            attachment_url=paper.attachment_url,
            file_type=paper.file_type,
            file_size=paper.file_size,
            created_at=paper.created_at
        )

        self.session.add(db_paper)
        if commit:
            await self.session.commit()
        else:
            await self.session.flush()
        return self._to_domain(db_paper)

    async def get_by_id(self, paper_id: uuid.UUID) -> Optional["Paper"]:
        db_paper = await self.session.get(PaperModel, paper_id)
        return self._to_domain(db_paper) if db_paper else None

    async def get_by_document(self, document_id: uuid.UUID) -> List["Paper"]:
        """Бумаги документа в порядке создания"""
        result = await self.session.execute(
            select(PaperModel)
            .where(PaperModel.document_id == document_id)
            .order_by(PaperModel.created_at.asc())
        )
        return [self._to_domain(paper) for paper in result.scalars().all()]

    async def get_by_documents(self, document_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, List["Paper"]]:
        """Бумаги сразу нескольких документов, сгруппированные по документу"""
        document_ids = list(document_ids)
        papers: Dict[uuid.UUID, List["Paper"]] = {document_id: [] for document_id in document_ids}
        if not document_ids:
            return papers

        result = await self.session.execute(
            select(PaperModel)
            .where(PaperModel.document_id.in_(document_ids))
            .order_by(PaperModel.created_at.asc())
        )
        for db_paper in result.scalars().all():
            papers[db_paper.document_id].append(self._to_domain(db_paper))
        return papers

    async def update(self, paper_id: uuid.UUID, values: Dict[str, Any]) -> Optional["Paper"]:
        result = await self.session.execute(
            update(PaperModel).where(PaperModel.id == paper_id).values(**values)
        )
        await self.session.commit()

        if result.rowcount == 0:
            return None

        self.session.expire_all()
        return await self.get_by_id(paper_id)

    async def delete(self, paper_id: uuid.UUID) -> bool:
        result = await self.session.execute(delete(PaperModel).where(PaperModel.id == paper_id))
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_paper: PaperModel) -> "Paper":
        from court_archive.domains.documents.entities import Paper

        return Paper(
            id=db_paper.id,
            document_id=db_paper.document_id,
            title=db_paper.title,
            content=db_paper.content,
            attachment_url=db_paper.attachment_url,
            file_type=db_paper.file_type,
            file_size=db_paper.file_size,
            created_at=db_paper.created_at
        )
