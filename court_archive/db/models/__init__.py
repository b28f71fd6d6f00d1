from court_archive.db.models.user import User
from court_archive.db.models.location import Block, Row, Section
from court_archive.db.models.document import Document, Paper

__all__ = [
    "User",
    "Block",
    "Row",
    "Section",
    "Document",
    "Paper"
]
