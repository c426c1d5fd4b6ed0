"""초기 데이터 시드 스크립트 — 스키마와 샘플 서비스/버전 생성.

Seed script — Creates the schema and a few sample services with versions.
Run this once against an empty database for local development.

Usage:
    python -m service_catalog.seed
"""

import asyncio
import logging

from sqlalchemy import select

from service_catalog.config import settings
from service_catalog.database import Database
from service_catalog.models import Service
from service_catalog.schemas.catalog import ServiceCreate, VersionCreate
from service_catalog.services.catalog_service import catalog_service
from service_catalog.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# 샘플 데이터 — (이름, 설명, [버전 라벨]) (Sample services and their version labels)
SAMPLE_SERVICES: list[tuple[str, str, list[str]]] = [
    ("Auth", "Authentication and session management", ["1.0.0", "1.1.0"]),
    ("Billing", "Invoices, payments and subscriptions", ["0.9.0"]),
    ("Notifications", "Email and push notification delivery", []),
]


async def seed() -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Idempotent: 서비스가 이미 있으면 건너뜁니다 (Skips when any service exists).
    """
    database = Database(settings)
    try:
        await database.create_schema()

        async with database.session_factory() as db:
            result = await db.execute(select(Service.id).limit(1))
            if result.scalar_one_or_none() is not None:
                logger.info("Already seeded. Skipping.")
                return

            for name, description, labels in SAMPLE_SERVICES:
                service = await catalog_service.create_service(
                    db, ServiceCreate(name=name, description=description)
                )
                for label in labels:
                    await catalog_service.create_version(
                        db, service.id, VersionCreate(version=label, description=f"{name} {label}")
                    )
            logger.info("Seeded %d services", len(SAMPLE_SERVICES))
    finally:
        await database.close()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed())
