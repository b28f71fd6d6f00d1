from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///:memory:"
    database_echo: bool = False

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 8 * 60

    bcrypt_rounds: int = 12

    # Demo data for the in-memory store
    seed_demo_data: bool = True
    seed_random_seed: Optional[int] = None

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # pending -> active -> archived (archived may be reactivated)
    enforce_status_workflow: bool = False

    recent_documents_limit: int = 10
    recent_activity_limit: int = 10
    activity_window_days: int = 90

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_memory_database(self) -> bool:
        return self.database_url.startswith("sqlite") and ":memory:" in self.database_url


@lru_cache()
def get_settings() -> Settings:
    """Cached settings built from the environment"""
    return Settings()
