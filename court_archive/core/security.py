from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from court_archive.core.config import Settings, get_settings


def _password_context(settings: Settings) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


def verify_password(plain_password: str, hashed_password: str, settings: Optional[Settings] = None) -> bool:
    """Проверка пароля"""
    settings = settings or get_settings()
    # bcrypt имеет ограничение 72 байта
    return _password_context(settings).verify(plain_password.encode("utf-8")[:72], hashed_password)


def get_password_hash(password: str, settings: Optional[Settings] = None) -> str:
    """Хеширование пароля"""
    settings = settings or get_settings()
    return _password_context(settings).hash(password.encode("utf-8")[:72])


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Создание JWT токена доступа"""
    settings = settings or get_settings()
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Optional[Settings] = None) -> Optional[Dict[str, Any]]:
    """Проверка JWT токена и извлечение данных"""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
