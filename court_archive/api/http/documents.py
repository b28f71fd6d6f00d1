from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List
import uuid

from court_archive.core.auth import get_current_user, require_editor
from court_archive.core.config import Settings
from court_archive.core.db import get_db, get_app_settings, get_section_locks
from court_archive.domains.documents.entities import DocumentCategory, DocumentStatus
from court_archive.domains.documents.references import SectionLocks
from court_archive.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentFilters, DocumentResponse,
    DocumentDetailsResponse, PaperResponse
)
from court_archive.domains.documents.services import DocumentService, PaperService
from court_archive.domains.errors import InvalidStatusTransitionError, UnknownLocationError
from court_archive.domains.identity.entities import User

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    section_locks: SectionLocks = Depends(get_section_locks)
) -> DocumentService:
    return DocumentService(db, settings, section_locks)


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Document not found"
    )


@router.get("", response_model=List[DocumentDetailsResponse])
async def list_documents(
    search: Optional[str] = Query(None, max_length=200),
    block_id: Optional[uuid.UUID] = None,
    row_id: Optional[uuid.UUID] = None,
    section_id: Optional[uuid.UUID] = None,
    category: Optional[DocumentCategory] = None,
    doc_status: Optional[DocumentStatus] = Query(None, alias="status"),
    document_service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user)
):
    """Поиск и фильтрация документов"""
    filters = DocumentFilters(
        block_id=block_id,
        row_id=row_id,
        section_id=section_id,
        category=category,
        status=doc_status
    )
    details = await document_service.list_documents(query=search, filters=filters)
    return [DocumentDetailsResponse.from_details(item) for item in details]


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    document_service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(require_editor)
):
    """Создание нового документа"""
    try:
        document = await document_service.create_document(document_data, current_user.id)
    except UnknownLocationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return DocumentResponse.model_validate(document)


@router.get("/{document_id}", response_model=DocumentDetailsResponse)
async def get_document(
    document_id: uuid.UUID,
    document_service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user)
):
    """Получение документа с местом хранения и бумагами"""
    details = await document_service.get_document(document_id)

    if not details:
        raise _not_found()

    return DocumentDetailsResponse.from_details(details)


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: uuid.UUID,
    update_data: DocumentUpdate,
    document_service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(require_editor)
):
    """Обновление документа"""
    try:
        document = await document_service.update_document(document_id, update_data)
    except InvalidStatusTransitionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    if not document:
        raise _not_found()

    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: uuid.UUID,
    document_service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(require_editor)
):
    """Удаление документа вместе с бумагами"""
    if not await document_service.delete_document(document_id):
        raise _not_found()


@router.get("/{document_id}/papers", response_model=List[PaperResponse])
async def get_document_papers(
    document_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Бумаги документа в порядке создания"""
    papers = await PaperService(db).get_papers(document_id)
    return [PaperResponse.model_validate(paper) for paper in papers]
