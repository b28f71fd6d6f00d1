"""Демонстрационные данные: два пользователя и заполненное хранилище A-J"""
import logging
import random
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from court_archive.core.config import Settings
from court_archive.db.repositories.document_repository import DocumentRepository, PaperRepository
from court_archive.db.repositories.location_repository import (
    BlockRepository, RowRepository, SectionRepository
)
from court_archive.db.repositories.user_repository import UserRepository
from court_archive.domains.documents.entities import Document, DocumentCategory, DocumentStatus, Paper
from court_archive.domains.documents.references import ReferenceAllocator
from court_archive.domains.identity.entities import Role, User
from court_archive.domains.locations.entities import Block, Row, Section
from court_archive.utils.dates import utcnow

logger = logging.getLogger(__name__)

BLOCK_LABELS = "ABCDEFGHIJ"
ROW_LABELS = ["1", "2", "3"]
SECTION_LABELS = ["1", "2", "3", "4"]

DOCUMENT_TITLES = [
    "حكم في القضية رقم",
    "محضر جلسة استماع",
    "وثائق مبررة للعقد التجاري",
    "طلب طلاق - ملف عائلي",
    "قرار استئناف",
    "شكوى جنائية",
]

PAPER_TITLES = [
    "الوثيقة الأساسية",
    "مرفقات القضية",
    "شهادات الشهود",
    "التقارير الطبية",
    "المراسلات القانونية",
]

COURT = "محكمة الاستئناف بالرباط"
PRIORITIES = ["عالية", "متوسطة"]
FILE_TYPES = ["pdf", "doc", "image"]


async def seed_demo_data(session: AsyncSession, settings: Settings, rng: Optional[random.Random] = None) -> bool:
    """Заполняет пустое хранилище; возвращает False, если пользователи уже есть"""
    rng = rng or random.Random(settings.seed_random_seed)
    user_repository = UserRepository(session)

    if await user_repository.get_all():
        logger.info("Entity store is not empty, skipping demo data")
        return False

    admin = await user_repository.create(User.create_user(
        username="admin",
        email="admin@cour-appel.ma",
        full_name="المسؤول الرئيسي",
        password="admin123",
        role=Role.ADMIN,
        settings=settings
    ))
    archivist = await user_repository.create(User.create_user(
        username="archivist",
        email="archivist@cour-appel.ma",
        full_name="أمينة بنعلي",
        password="arch123",
        role=Role.ARCHIVIST,
        settings=settings
    ))

    block_repository = BlockRepository(session)
    row_repository = RowRepository(session)
    section_repository = SectionRepository(session)
    document_repository = DocumentRepository(session)
    paper_repository = PaperRepository(session)
    allocator = ReferenceAllocator(session)

    now = utcnow()
    documents_count = 0
    papers_count = 0

    for block_label in BLOCK_LABELS:
        block = await block_repository.create(Block.create_block(block_label))

        for row_label in ROW_LABELS:
            row = await row_repository.create(Row.create_row(block.id, row_label))

            for section_label in SECTION_LABELS:
                section = await section_repository.create(Section.create_section(row.id, section_label))

                if rng.random() < 0.3:
                    continue

                for _ in range(rng.randint(1, 3)):
                    reference = await allocator.allocate(section.id)
                    created_at = now - timedelta(seconds=rng.uniform(0, 30 * 24 * 60 * 60))

                    document = Document.create_document(
                        section_id=section.id,
                        reference=reference,
                        title=f"{rng.choice(DOCUMENT_TITLES)} {reference}",
                        category=rng.choice(list(DocumentCategory)),
                        status=rng.choice(list(DocumentStatus)),
                        metadata={"priority": rng.choice(PRIORITIES), "court": COURT},
                        created_by=rng.choice([admin.id, archivist.id]),
                        created_at=created_at
                    )
                    document.updated_at = now
                    await document_repository.create(document, commit=False)
                    documents_count += 1

                    for paper_number in range(1, rng.randint(2, 5) + 1):
                        await paper_repository.create(Paper.create_paper(
                            document_id=document.id,
                            title=f"{rng.choice(PAPER_TITLES)} {paper_number}",
                            content="محتوى الوثيقة...",
                            attachment_url=f"/uploads/{document.id}_{paper_number}.pdf",
                            file_type=rng.choice(FILE_TYPES),
                            file_size=rng.randint(100_000, 5_100_000),
                            created_at=created_at + timedelta(minutes=paper_number)
                        ), commit=False)
                        papers_count += 1

        await session.commit()

    logger.info(f"Demo data seeded: {len(BLOCK_LABELS)} blocks, {documents_count} documents, {papers_count} papers")
    return True
