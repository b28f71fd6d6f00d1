from court_archive.domains.locations.entities import Block, Row, Section, label_sort_key
from court_archive.domains.locations.schemas import (
    BlockCreate, RowCreate, SectionCreate,
    BlockResponse, RowResponse, SectionResponse
)

__all__ = [
    "Block", "Row", "Section", "label_sort_key",
    "BlockCreate", "RowCreate", "SectionCreate",
    "BlockResponse", "RowResponse", "SectionResponse"
]
