from typing import Optional, List, Dict, Iterable, Set
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
import uuid

from court_archive.db.models.location import (
    Block as BlockModel, Row as RowModel, Section as SectionModel
)
from court_archive.domains.errors import DuplicateLabelError
from court_archive.domains.locations.entities import Block, Row, Section, label_sort_key


class BlockRepository:
    """Репозиторий блоков"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, block: Block) -> Block:
        db_block = BlockModel(id=block.id, label=block.label, created_at=block.created_at)
        self.session.add(db_block)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateLabelError(f"Block '{block.label}' already exists")
        return self._to_domain(db_block)

    async def get_by_id(self, block_id: uuid.UUID) -> Optional[Block]:
        db_block = await self.session.get(BlockModel, block_id)
        return self._to_domain(db_block) if db_block else None

    async def get_by_ids(self, block_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Block]:
        block_ids = list(block_ids)
        if not block_ids:
            return {}
        result = await self.session.execute(select(BlockModel).where(BlockModel.id.in_(block_ids)))
        return {db_block.id: self._to_domain(db_block) for db_block in result.scalars().all()}

    async def get_all(self) -> List[Block]:
        """Все блоки, отсортированные по метке"""
        result = await self.session.execute(select(BlockModel))
        blocks = [self._to_domain(db_block) for db_block in result.scalars().all()]
        return sorted(blocks, key=lambda b: b.label)

    def _to_domain(self, db_block: BlockModel) -> Block:
        return Block(id=db_block.id, label=db_block.label, created_at=db_block.created_at)


class RowRepository:
    """Репозиторий рядов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, row: Row) -> Row:
        db_row = RowModel(id=row.id, block_id=row.block_id, label=row.label, created_at=row.created_at)
        self.session.add(db_row)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateLabelError(f"Row '{row.label}' already exists in this block")
        return self._to_domain(db_row)

    async def get_by_id(self, row_id: uuid.UUID) -> Optional[Row]:
        db_row = await self.session.get(RowModel, row_id)
        return self._to_domain(db_row) if db_row else None

    async def get_by_ids(self, row_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Row]:
        row_ids = list(row_ids)
        if not row_ids:
            return {}
        result = await self.session.execute(select(RowModel).where(RowModel.id.in_(row_ids)))
        return {db_row.id: self._to_domain(db_row) for db_row in result.scalars().all()}

    async def get_by_block(self, block_id: uuid.UUID) -> List[Row]:
        """Ряды блока в порядке меток"""
        result = await self.session.execute(select(RowModel).where(RowModel.block_id == block_id))
        rows = [self._to_domain(db_row) for db_row in result.scalars().all()]
        return sorted(rows, key=lambda r: label_sort_key(r.label))

    def _to_domain(self, db_row: RowModel) -> Row:
        return Row(id=db_row.id, block_id=db_row.block_id, label=db_row.label, created_at=db_row.created_at)


class SectionRepository:
    """Репозиторий секций"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, section: Section) -> Section:
        db_section = SectionModel(
            id=section.id,
            row_id=section.row_id,
            label=section.label,
            next_sequence=section.next_sequence,
            created_at=section.created_at
        )
        self.session.add(db_section)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateLabelError(f"Section '{section.label}' already exists in this row")
        return self._to_domain(db_section)

    async def get_by_id(self, section_id: uuid.UUID) -> Optional[Section]:
        db_section = await self.session.get(SectionModel, section_id)
        return self._to_domain(db_section) if db_section else None

    async def get_by_ids(self, section_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Section]:
        section_ids = list(section_ids)
        if not section_ids:
            return {}
        result = await self.session.execute(select(SectionModel).where(SectionModel.id.in_(section_ids)))
        return {db_section.id: self._to_domain(db_section) for db_section in result.scalars().all()}

    async def get_by_row(self, row_id: uuid.UUID) -> List[Section]:
        """Секции ряда в порядке меток"""
        result = await self.session.execute(select(SectionModel).where(SectionModel.row_id == row_id))
        sections = [self._to_domain(db_section) for db_section in result.scalars().all()]
        return sorted(sections, key=lambda s: label_sort_key(s.label))

    async def ids_by_row(self, row_id: uuid.UUID) -> Set[uuid.UUID]:
        result = await self.session.execute(select(SectionModel.id).where(SectionModel.row_id == row_id))
        return set(result.scalars().all())

    async def ids_by_block(self, block_id: uuid.UUID) -> Set[uuid.UUID]:
        """Секции всех рядов блока"""
        result = await self.session.execute(
            select(SectionModel.id)
            .join(RowModel, SectionModel.row_id == RowModel.id)
            .where(RowModel.block_id == block_id)
        )
        return set(result.scalars().all())

    async def increment_sequence(self, section_id: uuid.UUID) -> Optional[int]:
        """Атомарно увеличивает счетчик секции и возвращает новое значение.

        Изменение не фиксируется: коммит делает вызывающий вместе со вставкой
        документа.
        """
        result = await self.session.execute(
            update(SectionModel)
            .where(SectionModel.id == section_id)
            .values(next_sequence=SectionModel.next_sequence + 1)
            .returning(SectionModel.next_sequence)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_section: SectionModel) -> Section:
        return Section(
            id=db_section.id,
            row_id=db_section.row_id,
            label=db_section.label,
            next_sequence=db_section.next_sequence,
            created_at=db_section.created_at
        )
