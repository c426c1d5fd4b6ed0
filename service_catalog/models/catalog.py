"""서비스 카탈로그 SQLAlchemy ORM 모델 정의.

Service catalog SQLAlchemy ORM model definitions.
A Service owns an ordered collection of Versions through the
``versions.service_id`` foreign key.

Tables:
    - services: 카탈로그에 등록된 서비스 (Cataloged services)
    - versions: 서비스별 릴리스 기록 (Release records owned by a service)
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from service_catalog.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Service(Base):
    """서비스 모델 — 카탈로그의 최상위 엔티티.

    Service model — a named organizational unit being cataloged.

    Attributes:
        id: 고유 식별자 (Generated integer identifier)
        name: 서비스 이름, 고유 (Unique service name, indexed)
        description: 설명 (Free-text description)
        created_at: 생성 일시 UTC (Creation timestamp in UTC)
        updated_at: 수정 일시 UTC (Last update timestamp in UTC)
        version_count: 소유 버전 수 — 저장하지 않고 조회 시 계산
                       (Owned version count, computed at read time, never persisted)

    Relationships:
        versions: 소유 버전 목록 (Owned versions, newest first)
    """

    __tablename__ = "services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 서비스 이름 — 고유 제약은 저장소가 강제 (Uniqueness enforced by the store)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # 연쇄 삭제는 레포지토리가 하나의 트랜잭션에서 처리 (Cascade delete is issued by the repository)
    versions = relationship(
        "Version",
        back_populates="service",
        order_by=lambda: (Version.created_at.desc(), Version.id.desc()),
    )

    # 파생 필드 — 매핑되지 않은 인스턴스 속성 (Derived, unmapped instance attribute)
    version_count = 0


class Version(Base):
    """버전 모델 — 하나의 서비스에 속한 릴리스 기록.

    Version model — a labeled release record owned by exactly one Service.

    Attributes:
        id: 고유 식별자 (Generated integer identifier)
        service_id: 소유 서비스 FK (Owning service foreign key, indexed)
        version: 버전 라벨 (Free-form label, e.g. "1.0.0")
        description: 설명 (Release notes)
        is_active: 활성 상태 (Active flag, default True)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "versions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_id: Mapped[int] = mapped_column(Integer, ForeignKey("services.id"), index=True, nullable=False)
    version: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    service = relationship("Service", back_populates="versions")
