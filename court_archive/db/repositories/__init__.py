from court_archive.db.repositories.user_repository import UserRepository
from court_archive.db.repositories.location_repository import (
    BlockRepository, RowRepository, SectionRepository
)
from court_archive.db.repositories.document_repository import DocumentRepository, PaperRepository

__all__ = [
    "UserRepository",
    "BlockRepository",
    "RowRepository",
    "SectionRepository",
    "DocumentRepository",
    "PaperRepository"
]
