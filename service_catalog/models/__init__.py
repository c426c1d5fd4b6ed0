"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    catalog: 서비스 및 버전 (Service and Version)
"""

from service_catalog.models.catalog import Service, Version

__all__ = ["Service", "Version"]
