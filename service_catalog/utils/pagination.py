"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a generic paginate function and the pagination metadata builder
shared by all list endpoints.
"""

import math
from typing import Any, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.schemas.common import Pagination

# 페이지 크기 허용 범위 — Accepted page size range
MIN_LIMIT: int = 1
MAX_LIMIT: int = 100
DEFAULT_LIMIT: int = 10


def normalize_page(page: int) -> int:
    """1 미만 페이지는 1로 보정 (Clamp page numbers below 1 to 1)."""
    return page if page >= 1 else 1


def normalize_limit(limit: int) -> int:
    """범위 밖 페이지 크기는 기본값으로 대체 (Out-of-range limits fall back to the default)."""
    return limit if MIN_LIMIT <= limit <= MAX_LIMIT else DEFAULT_LIMIT


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """페이지네이션 메타데이터를 계산합니다.

    Build pagination metadata with ``total_pages = ceil(total / limit)``.

    Args:
        page: 현재 페이지, 1부터 시작 (Current page, 1-indexed)
        limit: 페이지당 항목 수 (Items per page, >= 1)
        total: 전체 항목 수 (Total matching items)

    Returns:
        Pagination: 페이지네이션 정보 (Pagination metadata)
    """
    return Pagination(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
    )


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = DEFAULT_LIMIT,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery, before any
    ordering or OFFSET/LIMIT) and one for the actual page of results.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 필터와 정렬이 적용된 Select 쿼리
               (Filtered and ordered base query; ordering is dropped for the count)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    items: Sequence[Any] = result.scalars().all()

    return items, total
