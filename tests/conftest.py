"""Pytest configuration and shared fixtures."""

from datetime import datetime
from types import SimpleNamespace
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from court_archive.core.config import Settings
from court_archive.core.db import Database
from court_archive.db.repositories.document_repository import DocumentRepository
from court_archive.db.repositories.location_repository import (
    BlockRepository, RowRepository, SectionRepository
)
from court_archive.db.repositories.user_repository import UserRepository
from court_archive.domains.documents.entities import Document, DocumentCategory, DocumentStatus
from court_archive.domains.documents.references import ReferenceAllocator
from court_archive.domains.identity.entities import Role, User
from court_archive.domains.locations.entities import Block, Row, Section
from court_archive.main import create_app


@pytest.fixture
def settings() -> Settings:
    """Fast bcrypt, no demo data."""
    return Settings(
        seed_demo_data=False,
        bcrypt_rounds=4,
        jwt_secret="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
async def database(settings):
    """Fresh in-memory entity store per test."""
    database = Database(settings)
    await database.init()
    yield database
    await database.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
async def archive(session, settings):
    """Small archive: A.1.{1,2}, A.2.1, B.1.1 plus an admin and an archivist.

    Returns:
        SimpleNamespace with users, blocks, rows and sections by label
    """
    users = UserRepository(session)
    admin = await users.create(User.create_user(
        "admin", "admin@cour-appel.ma", "Admin", "admin123", Role.ADMIN, settings=settings
    ))
    archivist = await users.create(User.create_user(
        "archivist", "archivist@cour-appel.ma", "Archivist", "arch123", Role.ARCHIVIST, settings=settings
    ))

    blocks = BlockRepository(session)
    rows = RowRepository(session)
    sections = SectionRepository(session)

    block_a = await blocks.create(Block.create_block("A"))
    block_b = await blocks.create(Block.create_block("B"))
    row_a1 = await rows.create(Row.create_row(block_a.id, "1"))
    row_a2 = await rows.create(Row.create_row(block_a.id, "2"))
    row_b1 = await rows.create(Row.create_row(block_b.id, "1"))

    return SimpleNamespace(
        admin=admin,
        archivist=archivist,
        block_a=block_a,
        block_b=block_b,
        row_a1=row_a1,
        row_a2=row_a2,
        row_b1=row_b1,
        section_a11=await sections.create(Section.create_section(row_a1.id, "1")),
        section_a12=await sections.create(Section.create_section(row_a1.id, "2")),
        section_a21=await sections.create(Section.create_section(row_a2.id, "1")),
        section_b11=await sections.create(Section.create_section(row_b1.id, "1")),
    )


@pytest.fixture
def add_document(session):
    """Insert a document with explicit timestamps, allocating its reference."""

    async def _add(
        section_id,
        created_by,
        title: str = "Document",
        category: DocumentCategory = DocumentCategory.LEGAL,
        status: DocumentStatus = DocumentStatus.ACTIVE,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> Document:
        reference = await ReferenceAllocator(session).allocate(section_id)
        document = Document.create_document(
            section_id=section_id,
            reference=reference,
            title=title,
            category=category,
            status=status,
            created_by=created_by,
            created_at=created_at,
        )
        if updated_at is not None:
            document.updated_at = updated_at
        return await DocumentRepository(session).create(document)

    return _add


@pytest.fixture
def client() -> TestClient:
    """Test client over a seeded app with its own in-memory store."""
    app = create_app(Settings(
        seed_demo_data=True,
        seed_random_seed=7,
        bcrypt_rounds=4,
        jwt_secret="test-secret",
        log_level="WARNING",
    ))
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, username: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client) -> dict:
    return login(client, "admin", "admin123")


@pytest.fixture
def archivist_headers(client) -> dict:
    return login(client, "archivist", "arch123")


@pytest.fixture
def viewer_headers(client, admin_headers) -> dict:
    response = client.post("/api/users", headers=admin_headers, json={
        "username": "viewer",
        "email": "viewer@cour-appel.ma",
        "full_name": "Viewer",
        "password": "viewer123",
        "role": "viewer",
    })
    assert response.status_code == 201, response.text
    return login(client, "viewer", "viewer123")
