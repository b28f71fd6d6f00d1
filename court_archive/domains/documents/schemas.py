from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List, Dict, Any
import uuid
from datetime import datetime

from court_archive.domains.documents.entities import DocumentCategory, DocumentStatus
from court_archive.domains.identity.schemas import UserResponse
from court_archive.domains.locations.schemas import BlockResponse, RowResponse, SectionResponse


def _strip_title(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError('Title cannot be empty')
    return v.strip() if v else v


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    section_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=500)
    category: DocumentCategory
    status: DocumentStatus = DocumentStatus.ACTIVE
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _strip_title(v)


class DocumentUpdate(BaseModel):
    """Схема для частичного обновления документа (ссылка и секция неизменны)"""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    category: Optional[DocumentCategory] = None
    status: Optional[DocumentStatus] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _strip_title(v)


class DocumentFilters(BaseModel):
    """Фильтры списка документов; все активные фильтры объединяются через AND"""
    block_id: Optional[uuid.UUID] = None
    row_id: Optional[uuid.UUID] = None
    section_id: Optional[uuid.UUID] = None
    category: Optional[DocumentCategory] = None
    status: Optional[DocumentStatus] = None
    created_by: Optional[uuid.UUID] = None

    @property
    def has_location(self) -> bool:
        return any(v is not None for v in (self.block_id, self.row_id, self.section_id))


class DocumentResponse(BaseModel):
    """Документ без связанных сущностей"""
    id: uuid.UUID
    section_id: uuid.UUID
    reference: str
    sequence: int
    title: str
    category: DocumentCategory
    status: DocumentStatus
    metadata: Dict[str, Any]
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaperCreate(BaseModel):
    document_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=500)
    content: Optional[str] = None
    attachment_url: Optional[str] = Field(None, max_length=1024)
    file_type: Optional[str] = Field(None, max_length=32)
    file_size: Optional[int] = Field(None, ge=0)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _strip_title(v)


class PaperUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = None
    attachment_url: Optional[str] = Field(None, max_length=1024)
    file_type: Optional[str] = Field(None, max_length=32)
    file_size: Optional[int] = Field(None, ge=0)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _strip_title(v)


class PaperResponse(BaseModel):
    id: uuid.UUID
    document_id: uuid.UUID
    title: str
    content: Optional[str] = None
    attachment_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentDetailsResponse(DocumentResponse):
    """Документ с местом хранения, бумагами и автором"""
    block: BlockResponse
    row: RowResponse
    section: SectionResponse
    papers: List[PaperResponse]
    creator: UserResponse

    @classmethod
    def from_details(cls, details) -> "DocumentDetailsResponse":
        document = details.document
        return cls(
            id=document.id,
            section_id=document.section_id,
            reference=document.reference,
            sequence=document.sequence,
            title=document.title,
            category=document.category,
            status=document.status,
            metadata=document.metadata,
            created_by=document.created_by,
            created_at=document.created_at,
            updated_at=document.updated_at,
            block=BlockResponse.model_validate(details.block),
            row=RowResponse.model_validate(details.row),
            section=SectionResponse.model_validate(details.section),
            papers=[PaperResponse.model_validate(paper) for paper in details.papers],
            creator=UserResponse.model_validate(details.creator)
        )
