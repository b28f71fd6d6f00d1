from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from court_archive.core.auth import require_editor
from court_archive.core.db import get_db
from court_archive.domains.documents.schemas import PaperCreate, PaperUpdate, PaperResponse
from court_archive.domains.documents.services import PaperService
from court_archive.domains.errors import UnknownLocationError
from court_archive.domains.identity.entities import User

router = APIRouter(prefix="/papers", tags=["papers"])


@router.post("", response_model=PaperResponse, status_code=status.HTTP_201_CREATED)
async def create_paper(
    paper_data: PaperCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor)
):
    """Добавление бумаги к документу"""
    try:
        paper = await PaperService(db).create_paper(paper_data)
    except UnknownLocationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return PaperResponse.model_validate(paper)


@router.put("/{paper_id}", response_model=PaperResponse)
async def update_paper(
    paper_id: uuid.UUID,
    update_data: PaperUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor)
):
    paper = await PaperService(db).update_paper(paper_id, update_data)

    if not paper:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Paper not found"
        )

    return PaperResponse.model_validate(paper)


@router.delete("/{paper_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_paper(
    paper_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor)
):
    if not await PaperService(db).delete_paper(paper_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Paper not found"
        )
