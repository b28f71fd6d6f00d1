from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from court_archive.core.auth import get_current_user, require_admin
from court_archive.core.db import get_db
from court_archive.domains.errors import DuplicateLabelError, UnknownLocationError
from court_archive.domains.identity.entities import User
from court_archive.domains.locations.schemas import (
    BlockCreate, RowCreate, SectionCreate, BlockResponse, RowResponse, SectionResponse
)
from court_archive.domains.locations.services import LocationService

router = APIRouter(tags=["locations"])


@router.get("/blocks", response_model=List[BlockResponse])
async def get_blocks(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Все блоки хранилища"""
    blocks = await LocationService(db).list_blocks()
    return [BlockResponse.model_validate(block) for block in blocks]


@router.get("/blocks/{block_id}", response_model=BlockResponse)
async def get_block(
    block_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    block = await LocationService(db).get_block(block_id)

    if not block:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Block not found"
        )

    return BlockResponse.model_validate(block)


@router.get("/blocks/{block_id}/rows", response_model=List[RowResponse])
async def get_rows(
    block_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Ряды блока"""
    rows = await LocationService(db).get_rows(block_id)
    return [RowResponse.model_validate(row) for row in rows]


@router.get("/rows/{row_id}/sections", response_model=List[SectionResponse])
async def get_sections(
    row_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Секции ряда"""
    sections = await LocationService(db).get_sections(row_id)
    return [SectionResponse.model_validate(section) for section in sections]


@router.post("/blocks", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
async def create_block(
    block_data: BlockCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    try:
        block = await LocationService(db).create_block(block_data)
    except DuplicateLabelError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return BlockResponse.model_validate(block)


@router.post("/rows", response_model=RowResponse, status_code=status.HTTP_201_CREATED)
async def create_row(
    row_data: RowCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    try:
        row = await LocationService(db).create_row(row_data)
    except UnknownLocationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except DuplicateLabelError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return RowResponse.model_validate(row)


@router.post("/sections", response_model=SectionResponse, status_code=status.HTTP_201_CREATED)
async def create_section(
    section_data: SectionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    try:
        section = await LocationService(db).create_section(section_data)
    except UnknownLocationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except DuplicateLabelError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return SectionResponse.model_validate(section)
