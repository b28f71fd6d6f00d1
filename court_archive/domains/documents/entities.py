import enum
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any, TYPE_CHECKING

from court_archive.utils.dates import utcnow

if TYPE_CHECKING:
    from court_archive.domains.identity.entities import User
    from court_archive.domains.locations.entities import Block, Row, Section


class DocumentStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    ARCHIVED = "archived"


class DocumentCategory(str, enum.Enum):
    LEGAL = "legal"
    FINANCIAL = "financial"
    ADMINISTRATIVE = "administrative"
    CIVIL = "civil"
    CRIMINAL = "criminal"
    COMMERCIAL = "commercial"
    FAMILY = "family"


# Разрешенные переходы статуса при enforce_status_workflow
STATUS_TRANSITIONS = {
    DocumentStatus.PENDING: {DocumentStatus.ACTIVE},
    DocumentStatus.ACTIVE: {DocumentStatus.ARCHIVED},
    DocumentStatus.ARCHIVED: {DocumentStatus.ACTIVE},
}


def can_transition(current: DocumentStatus, requested: DocumentStatus) -> bool:
    return current == requested or requested in STATUS_TRANSITIONS[current]


def format_reference(block_label: str, row_label: str, section_label: str, sequence: int) -> str:
    return f"{block_label}.{row_label}.{section_label}.{sequence}"


class Document:
    """Сущность документа (дела), хранящегося в секции"""

    def __init__(
        self,
        id: uuid.UUID,
        section_id: uuid.UUID,
        reference: str,
        title: str,
        category: DocumentCategory,
        created_by: uuid.UUID,
        status: DocumentStatus = DocumentStatus.ACTIVE,
        metadata: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.section_id = section_id
        self.reference = reference
        self.title = title
        self.category = DocumentCategory(category)
        self.status = DocumentStatus(status)
        self.metadata = metadata or {}
        self.created_by = created_by
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    @classmethod
    def create_document(
        cls,
        section_id: uuid.UUID,
        reference: str,
        title: str,
        category: DocumentCategory,
        created_by: uuid.UUID,
        status: DocumentStatus = DocumentStatus.ACTIVE,
        metadata: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None
    ) -> "Document":
        """Создание нового документа с уже выделенной ссылкой"""
        return cls(
            id=uuid.uuid4(),
            section_id=section_id,
            reference=reference,
            title=title,
            category=category,
            created_by=created_by,
            status=status,
            metadata=metadata,
            created_at=created_at
        )

    @property
    def sequence(self) -> int:
        return int(self.reference.rsplit(".", 1)[-1])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, reference={self.reference}, status={self.status.value})"


class Paper:
    """Отдельная бумага / вложение документа"""

    def __init__(
        self,
        id: uuid.UUID,
        document_id: uuid.UUID,
        title: str,
        content: Optional[str] = None,
        attachment_url: Optional[str] = None,
        file_type: Optional[str] = None,
        file_size: Optional[int] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.document_id = document_id
        self.title = title
        self.content = content
        self.attachment_url = attachment_url
        self.file_type = file_type
        self.file_size = file_size
        self.created_at = created_at or utcnow()

    @classmethod
    def create_paper(cls, document_id: uuid.UUID, title: str, **fields) -> "Paper":
        return cls(id=uuid.uuid4(), document_id=document_id, title=title, **fields)

    def __repr__(self) -> str:
        return f"Paper(id={self.id}, document_id={self.document_id}, title={self.title})"


class DocumentDetails:
    """Документ вместе с местом хранения, бумагами и автором"""

    def __init__(
        self,
        document: Document,
        block: "Block",
        row: "Row",
        section: "Section",
        papers: List[Paper],
        creator: "User"
    ):
        self.document = document
        self.block = block
        self.row = row
        self.section = section
        self.papers = papers
        self.creator = creator

    def __repr__(self) -> str:
        return f"DocumentDetails(reference={self.document.reference}, papers={len(self.papers)})"
