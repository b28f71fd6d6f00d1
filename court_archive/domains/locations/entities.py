import uuid
from datetime import datetime
from typing import Optional

from court_archive.utils.dates import utcnow


def label_sort_key(label: str):
    """Числовые метки сортируются как числа ("2" < "10"), остальные - после них"""
    if label.isdigit():
        return (0, int(label), label)
    return (1, 0, label)


class Block:
    """Блок стеллажей - верхний уровень хранения"""

    def __init__(self, id: uuid.UUID, label: str, created_at: Optional[datetime] = None):
        self.id = id
        self.label = label
        self.created_at = created_at or utcnow()

    @classmethod
    def create_block(cls, label: str) -> "Block":
        return cls(id=uuid.uuid4(), label=label)

    def __repr__(self) -> str:
        return f"Block(id={self.id}, label={self.label})"


class Row:
    def __init__(self, id: uuid.UUID, block_id: uuid.UUID, label: str, created_at: Optional[datetime] = None):
        self.id = id
        self.block_id = block_id
        self.label = label
        self.created_at = created_at or utcnow()

    @classmethod
    def create_row(cls, block_id: uuid.UUID, label: str) -> "Row":
        return cls(id=uuid.uuid4(), block_id=block_id, label=label)

    def __repr__(self) -> str:
        return f"Row(id={self.id}, block_id={self.block_id}, label={self.label})"


class Section:
    def __init__(
        self,
        id: uuid.UUID,
        row_id: uuid.UUID,
        label: str,
        next_sequence: int = 0,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.row_id = row_id
        self.label = label
        self.next_sequence = next_sequence
        self.created_at = created_at or utcnow()

    @classmethod
    def create_section(cls, row_id: uuid.UUID, label: str) -> "Section":
        return cls(id=uuid.uuid4(), row_id=row_id, label=label)

    def __repr__(self) -> str:
        return f"Section(id={self.id}, row_id={self.row_id}, label={self.label})"
