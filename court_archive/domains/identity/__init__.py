from court_archive.domains.identity.entities import User, Role
from court_archive.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserUpdate,
    UserResponse, Token
)

__all__ = [
    "User", "Role",
    "UserBase", "UserCreate", "UserLogin", "UserUpdate",
    "UserResponse", "Token"
]
