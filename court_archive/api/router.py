from fastapi import APIRouter

from court_archive.api.http import (
    health_router, auth_router, users_router, locations_router,
    documents_router, papers_router, dashboard_router
)

api_router = APIRouter(prefix="/api")
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(locations_router)
api_router.include_router(documents_router)
api_router.include_router(papers_router)
api_router.include_router(dashboard_router)
