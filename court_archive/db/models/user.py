from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from court_archive.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="viewer")
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    created_documents = relationship("Document", back_populates="creator")
