from court_archive.domains.documents.entities import (
    Document, DocumentCategory, DocumentDetails, DocumentStatus, Paper
)
from court_archive.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentFilters, DocumentResponse,
    DocumentDetailsResponse, PaperCreate, PaperUpdate, PaperResponse
)

__all__ = [
    "Document", "DocumentCategory", "DocumentDetails", "DocumentStatus", "Paper",
    "DocumentCreate", "DocumentUpdate", "DocumentFilters", "DocumentResponse",
    "DocumentDetailsResponse", "PaperCreate", "PaperUpdate", "PaperResponse"
]
