import logging
import uuid
from typing import List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.db.repositories.location_repository import (
    BlockRepository, RowRepository, SectionRepository
)
from court_archive.domains.errors import UnknownLocationError
from court_archive.domains.locations.entities import Block, Row, Section
from court_archive.domains.locations.schemas import BlockCreate, RowCreate, SectionCreate

logger = logging.getLogger(__name__)


class HierarchyResolver:
    """Разворачивает фильтр по месту хранения в набор id секций.

    Учитывается только самый точный уровень: секция, затем ряд, затем блок.
    """

    def __init__(self, session: AsyncSession):
        self.block_repository = BlockRepository(session)
        self.row_repository = RowRepository(session)
        self.section_repository = SectionRepository(session)

    async def resolve(
        self,
        block_id: Optional[uuid.UUID] = None,
        row_id: Optional[uuid.UUID] = None,
        section_id: Optional[uuid.UUID] = None
    ) -> Optional[Set[uuid.UUID]]:
        """None - фильтр по месту не задан; пустой набор - ничего не найдено"""
        if section_id is not None:
            section = await self.section_repository.get_by_id(section_id)
            return {section.id} if section else set()

        if row_id is not None:
            return await self.section_repository.ids_by_row(row_id)

        if block_id is not None:
            return await self.section_repository.ids_by_block(block_id)

        return None


class LocationService:
    """Сервис для работы со структурой хранения"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.block_repository = BlockRepository(session)
        self.row_repository = RowRepository(session)
        self.section_repository = SectionRepository(session)

    async def list_blocks(self) -> List[Block]:
        return await self.block_repository.get_all()

    async def get_block(self, block_id: uuid.UUID) -> Optional[Block]:
        return await self.block_repository.get_by_id(block_id)

    async def get_rows(self, block_id: uuid.UUID) -> List[Row]:
        return await self.row_repository.get_by_block(block_id)

    async def get_sections(self, row_id: uuid.UUID) -> List[Section]:
        return await self.section_repository.get_by_row(row_id)

    async def create_block(self, block_data: BlockCreate) -> Block:
        block = await self.block_repository.create(Block.create_block(block_data.label))
        logger.info(f"Block {block.label} created")
        return block

    async def create_row(self, row_data: RowCreate) -> Row:
        if not await self.block_repository.get_by_id(row_data.block_id):
            raise UnknownLocationError("block", row_data.block_id)

        return await self.row_repository.create(Row.create_row(row_data.block_id, row_data.label))

    async def create_section(self, section_data: SectionCreate) -> Section:
        if not await self.row_repository.get_by_id(section_data.row_id):
            raise UnknownLocationError("row", section_data.row_id)

        return await self.section_repository.create(
            Section.create_section(section_data.row_id, section_data.label)
        )
