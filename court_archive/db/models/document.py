from sqlalchemy import Column, String, Text, Integer, ForeignKey, Uuid, DateTime, JSON
from sqlalchemy.orm import relationship

from court_archive.db.base import BaseModel
from court_archive.utils.dates import utcnow


class Document(BaseModel):
    __tablename__ = "documents"

    section_id = Column(Uuid, ForeignKey("sections.id"), nullable=False, index=True)
    reference = Column(String(64), unique=True, nullable=False)
    title = Column(String(500), nullable=False)
    category = Column(String(32), nullable=False)
    # "metadata" зарезервировано в declarative API
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    status = Column(String(32), nullable=False, default="active")
    created_by = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    section = relationship("Section", back_populates="documents")
    creator = relationship("User", back_populates="created_documents")
    papers = relationship("Paper", back_populates="document", cascade="all, delete-orphan")


class Paper(BaseModel):
    __tablename__ = "papers"

    document_id = Column(Uuid, ForeignKey("documents.id"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=True)
    attachment_url = Column(String(1024), nullable=True)
    file_type = Column(String(32), nullable=True)
    file_size = Column(Integer, nullable=True)

    # Relationships
    document = relationship("Document", back_populates="papers")
