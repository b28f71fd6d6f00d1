from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Optional
from datetime import datetime
import uuid

from court_archive.domains.identity.entities import Role


def _check_username(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.replace('_', '').replace('-', '').replace('.', '').isalnum():
        raise ValueError('Username must contain only letters, digits, dots, underscores and hyphens')
    return v


class UserBase(BaseModel):
    """Базовая схема пользователя"""
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.VIEWER
    is_active: bool = True

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _check_username(v)


class UserCreate(UserBase):
    """Схема для создания пользователя"""
    password: str = Field(..., min_length=6, max_length=128)


class UserUpdate(BaseModel):
    """Схема для частичного обновления пользователя"""
    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    is_active: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _check_username(v)


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Пользователь без пароля"""
    id: uuid.UUID
    username: str
    email: str
    full_name: str
    role: Role
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Схема для JWT токена"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
