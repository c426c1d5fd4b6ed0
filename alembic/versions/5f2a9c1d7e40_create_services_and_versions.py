"""create_services_and_versions

Revision ID: 5f2a9c1d7e40
Revises:
Create Date: 2026-10-18 09:00:00.000000

서비스 카탈로그 테이블 생성: services, versions.
Create service catalog tables: services, versions.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2a9c1d7e40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # services — 카탈로그 서비스 (name은 저장소 수준에서 고유)
    # Cataloged services; name uniqueness enforced by the store
    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_services_name', 'services', ['name'], unique=True)

    # versions — 서비스별 릴리스 기록 (service_id FK, 삭제는 애플리케이션 트랜잭션에서 처리)
    # Release records; removed together with their service in one transaction
    op.create_table(
        'versions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('version', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_versions_service_id', 'versions', ['service_id'])


def downgrade() -> None:
    # versions 먼저 삭제 (FK 의존) — Drop versions first (depends on services)
    op.drop_table('versions')
    op.drop_table('services')
