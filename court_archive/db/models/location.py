from sqlalchemy import Column, String, Integer, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from court_archive.db.base import BaseModel


class Block(BaseModel):
    __tablename__ = "blocks"

    label = Column(String(32), unique=True, nullable=False)

    # Relationships
    rows = relationship("Row", back_populates="block")


class Row(BaseModel):
    __tablename__ = "rows"
    __table_args__ = (UniqueConstraint("block_id", "label", name="uq_rows_block_label"),)

    block_id = Column(Uuid, ForeignKey("blocks.id"), nullable=False, index=True)
    label = Column(String(32), nullable=False)

    # Relationships
    block = relationship("Block", back_populates="rows")
    sections = relationship("Section", back_populates="row")


class Section(BaseModel):
    __tablename__ = "sections"
    __table_args__ = (UniqueConstraint("row_id", "label", name="uq_sections_row_label"),)

    row_id = Column(Uuid, ForeignKey("rows.id"), nullable=False, index=True)
    label = Column(String(32), nullable=False)
    # Последний выданный порядковый номер документа в секции
    next_sequence = Column(Integer, nullable=False, default=0)

    # Relationships
    row = relationship("Row", back_populates="sections")
    documents = relationship("Document", back_populates="section")
