from court_archive.api.http.health import router as health_router
from court_archive.api.http.auth import router as auth_router
from court_archive.api.http.users import router as users_router
from court_archive.api.http.locations import router as locations_router
from court_archive.api.http.documents import router as documents_router
from court_archive.api.http.papers import router as papers_router
from court_archive.api.http.dashboard import router as dashboard_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "locations_router",
    "documents_router",
    "papers_router",
    "dashboard_router"
]
