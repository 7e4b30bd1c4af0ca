"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the page request / page models, the count-skip optimizer used by
the member search, and a generic paginate helper for entity queries.

Count-skip rule (get_page):
    offset == 0 and len(items) < limit  →  total = len(items), no COUNT query
    otherwise                           →  total = await count_fn()
"""

import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, computed_field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.utils.exceptions import InvalidPageRequestError

T = TypeVar("T")

logger = logging.getLogger(__name__)

# OFFSET/LIMIT 상한: BIGINT 최대값 (Largest value the drivers can bind)
MAX_BOUND: int = 2**63 - 1


class SortTerm(BaseModel):
    """정렬 조건: 필드명, 방향, null 위치.

    A single sort term. Field names are resolved against a whitelist by
    the repository that applies them.

    Attributes:
        field: 정렬 대상 필드명 (Field name to sort by)
        direction: 정렬 방향 (Sort direction, "asc" | "desc")
        nulls_last: null 값을 마지막에 배치 (Place nulls after all non-null values)
    """

    field: str
    direction: Literal["asc", "desc"] = "asc"
    nulls_last: bool = False

    model_config = {"frozen": True}


class PageRequest(BaseModel):
    """페이지 요청: offset/limit 및 선택적 정렬.

    Page request with zero-based offset, positive limit and optional sort terms.

    Attributes:
        offset: 건너뛸 행 수, 0 이상 (Rows to skip, >= 0)
        limit: 페이지 크기, 1 이상 (Page size, > 0)
        sort: 정렬 조건 목록 (Ordered sort terms)
    """

    offset: int = Field(0, ge=0, le=MAX_BOUND)
    limit: int = Field(20, gt=0, le=MAX_BOUND)
    sort: tuple[SortTerm, ...] = ()

    model_config = {"frozen": True}

    @classmethod
    def of(cls, page: int, size: int, sort: Sequence[SortTerm] = ()) -> "PageRequest":
        """0부터 시작하는 페이지 번호로 요청을 만듭니다.

        Build a request from a zero-based page number and a page size.
        """
        if page < 0:
            raise InvalidPageRequestError("page must not be negative")
        if size <= 0:
            raise InvalidPageRequestError("size must be positive")
        if size > MAX_BOUND or page * size > MAX_BOUND:
            raise InvalidPageRequestError(f"page {page} of size {size} is out of range")
        return cls(offset=page * size, limit=size, sort=tuple(sort))


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        offset: 요청 offset (Offset used to produce this page)
        limit: 요청 limit (Limit used to produce this page)
    """

    items: list[T]
    total: int
    offset: int
    limit: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def page(self) -> int:
        """현재 페이지 번호: 0부터 시작 (Current page, 0-indexed)."""
        return self.offset // self.limit

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pages(self) -> int:
        """전체 페이지 수 (Total pages, ceil(total / limit))."""
        return math.ceil(self.total / self.limit)


def validate_page_request(page_request: PageRequest) -> None:
    """페이지 요청을 검증합니다 (쿼리 실행 전).

    Reject a negative or unbindable offset and a non-positive or unbindable
    limit before any query runs. Covers requests built with model_construct,
    which skips field validation.

    Raises:
        InvalidPageRequestError: offset < 0, limit <= 0, 또는 MAX_BOUND 초과
    """
    if page_request.offset < 0:
        raise InvalidPageRequestError(f"offset must not be negative: {page_request.offset}")
    if page_request.limit <= 0:
        raise InvalidPageRequestError(f"limit must be positive: {page_request.limit}")
    if page_request.offset > MAX_BOUND or page_request.limit > MAX_BOUND:
        raise InvalidPageRequestError(f"offset/limit must not exceed {MAX_BOUND}")


async def get_page(
    items: Sequence[T],
    page_request: PageRequest,
    count_fn: Callable[[], Awaitable[int]],
    *,
    skip_last_page_count: bool = False,
) -> Page[T]:
    """조회된 페이지 항목으로 Page를 만들고, 필요할 때만 전체 개수를 조회합니다.

    Build a Page from already-fetched items, awaiting count_fn only when
    the items cannot prove the total by themselves.

    The first page with fewer rows than the limit already holds every
    matching row, so its total is len(items). With skip_last_page_count,
    a later page holding 1..limit-1 rows is known to be the last page and
    its total is offset + len(items); without it, later pages always count.

    Args:
        items: 현재 페이지 항목 (Fetched page rows, len <= limit)
        page_request: 페이지 요청 (Offset/limit used for the fetch)
        count_fn: 전체 개수 조회 코루틴 팩토리 (Zero-arg coroutine factory for COUNT)
        skip_last_page_count: 마지막 페이지 개수 생략 여부 (Also skip COUNT on a short later page)

    Returns:
        Page[T]: 페이지 결과 (Page with items and exact total)
    """
    validate_page_request(page_request)
    offset: int = page_request.offset
    limit: int = page_request.limit
    size: int = len(items)

    if offset == 0 and size < limit:
        logger.debug("count-skipped: first page holds all %d rows", size)
        total: int = size
    elif skip_last_page_count and offset > 0 and 0 < size < limit:
        logger.debug("count-skipped: last page at offset %d holds %d rows", offset, size)
        total = offset + size
    else:
        total = await count_fn()
        logger.debug("count-queried: total=%d (offset=%d, limit=%d)", total, offset, limit)

    return Page(items=list(items), total=total, offset=offset, limit=limit)


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
) -> Page[Any]:
    """SQLAlchemy 엔티티 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated entity query, returning ORM objects and the total.
    Always runs the COUNT (via subquery) before the page query.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page_request: 페이지 요청 (Offset/limit)

    Returns:
        Page[Any]: 페이지 결과 (Page of scalar results)
    """
    validate_page_request(page_request)

    # 전체 개수 조회: 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회: OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    result = await db.execute(query.offset(page_request.offset).limit(page_request.limit))
    items: Sequence[Any] = result.scalars().all()

    return Page[Any](items=list(items), total=total, offset=page_request.offset, limit=page_request.limit)
