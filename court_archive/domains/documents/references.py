import asyncio
import uuid
from collections import defaultdict
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.db.repositories.location_repository import (
    BlockRepository, RowRepository, SectionRepository
)
from court_archive.domains.documents.entities import format_reference
from court_archive.domains.errors import CorruptedReferenceError, UnknownLocationError


class SectionLocks:
    """Замки на секции: выделение номера и вставка документа идут под одним замком"""

    def __init__(self):
        self._locks: Dict[uuid.UUID, asyncio.Lock] = defaultdict(asyncio.Lock)

    def for_section(self, section_id: uuid.UUID) -> asyncio.Lock:
        return self._locks[section_id]


class ReferenceAllocator:
    """Выдает ссылки вида БЛОК.РЯД.СЕКЦИЯ.НОМЕР.

    Номер берется из постоянного счетчика секции, поэтому удаление
    документов никогда не освобождает уже выданные номера.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.block_repository = BlockRepository(session)
        self.row_repository = RowRepository(session)
        self.section_repository = SectionRepository(session)

    async def allocate(self, section_id: uuid.UUID) -> str:
        """Увеличивает счетчик секции (без коммита) и возвращает новую ссылку"""
        section = await self.section_repository.get_by_id(section_id)
        if not section:
            raise UnknownLocationError("section", section_id)

        row = await self.row_repository.get_by_id(section.row_id)
        if not row:
            raise CorruptedReferenceError(section_id, "row", section.row_id)

        block = await self.block_repository.get_by_id(row.block_id)
        if not block:
            raise CorruptedReferenceError(section_id, "block", row.block_id)

        sequence = await self.section_repository.increment_sequence(section_id)
        return format_reference(block.label, row.label, section.label, sequence)
