import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from court_archive import __version__
from court_archive.api.router import api_router
from court_archive.core.config import Settings, get_settings
from court_archive.core.db import Database
from court_archive.core.logging import setup_logging
from court_archive.domains.documents.references import SectionLocks
from court_archive.domains.errors import CorruptedReferenceError
from court_archive.seed import seed_demo_data

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Сборка приложения; каждый вызов получает собственное хранилище"""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        database = Database(settings)
        await database.init()

        app.state.database = database
        app.state.settings = settings
        app.state.section_locks = SectionLocks()

        if settings.seed_demo_data:
            async with database.session() as session:
                await seed_demo_data(session, settings)

        logger.info(f"Court archive {__version__} started")
        yield

        logger.info("Shutting down court archive")
        await database.dispose()

    app = FastAPI(
        title="Court Archive",
        description="Учет судебных дел и документов в архиве блок / ряд / секция",
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CorruptedReferenceError)
    async def corrupted_reference_handler(request: Request, exc: CorruptedReferenceError):
        logger.error(f"Corrupted reference on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Corrupted reference in entity store"}
        )

    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Корневой эндпоинт"""
        return {
            "message": "Court Archive API",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/health"
        }

    return app


app = create_app()
