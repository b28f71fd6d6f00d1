from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import datetime
import uuid


def _strip_label(v: str) -> str:
    if not v.strip():
        raise ValueError('Label cannot be empty')
    if "." in v:
        raise ValueError('Label cannot contain "."')
    return v.strip()


class BlockCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=32)

    @field_validator('label')
    @classmethod
    def validate_label(cls, v):
        return _strip_label(v).upper()


class RowCreate(BaseModel):
    block_id: uuid.UUID
    label: str = Field(..., min_length=1, max_length=32)

    @field_validator('label')
    @classmethod
    def validate_label(cls, v):
        return _strip_label(v)


class SectionCreate(BaseModel):
    row_id: uuid.UUID
    label: str = Field(..., min_length=1, max_length=32)

    @field_validator('label')
    @classmethod
    def validate_label(cls, v):
        return _strip_label(v)


class BlockResponse(BaseModel):
    id: uuid.UUID
    label: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RowResponse(BaseModel):
    id: uuid.UUID
    block_id: uuid.UUID
    label: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SectionResponse(BaseModel):
    id: uuid.UUID
    row_id: uuid.UUID
    label: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
