"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared across API domains:
pagination metadata and the error envelope.
"""

from typing import Any

from pydantic import BaseModel


class Pagination(BaseModel):
    """페이지네이션 정보 스키마.

    Pagination metadata returned with every list response.

    Attributes:
        current_page: 현재 페이지 번호 (Current page, 1-indexed)
        total_pages: 전체 페이지 수 (ceil(total_items / items_per_page))
        total_items: 전체 항목 수 (Total matching items)
        items_per_page: 페이지당 항목 수 (Page size)
    """

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class ErrorResponse(BaseModel):
    """오류 응답 스키마.

    Standard error envelope for every failed request.

    Attributes:
        code: 기계 판독용 오류 코드 (Machine-readable error code)
        message: 사람이 읽는 오류 메시지 (Human-readable error message)
        details: 추가 정보 (Optional detail payload)
    """

    code: str
    message: str
    details: Any = None
