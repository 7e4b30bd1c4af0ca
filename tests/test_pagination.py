"""페이지네이션 유틸리티 테스트.

Pagination utility tests: PageRequest validation, Page metadata,
and the count-skip decision of get_page (with a mocked count function).
"""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from member_search.utils.exceptions import InvalidPageRequestError
from member_search.utils.pagination import (
    MAX_BOUND,
    Page,
    PageRequest,
    SortTerm,
    get_page,
    validate_page_request,
)


class TestPageRequest:
    """페이지 요청 검증 테스트."""

    def test_defaults(self):
        req = PageRequest()
        assert req.offset == 0
        assert req.limit == 20
        assert req.sort == ()

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(offset=-1, limit=10)

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_rejected(self, limit):
        with pytest.raises(ValidationError):
            PageRequest(offset=0, limit=limit)

    def test_of_computes_offset(self):
        req = PageRequest.of(2, 5, [SortTerm(field="age", direction="desc")])
        assert req.offset == 10
        assert req.limit == 5
        assert req.sort[0].field == "age"

    def test_of_rejects_bad_values(self):
        with pytest.raises(InvalidPageRequestError):
            PageRequest.of(-1, 5)
        with pytest.raises(InvalidPageRequestError):
            PageRequest.of(0, 0)

    def test_of_rejects_unbindable_offset(self):
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest.of(10**19, 10)
        assert exc_info.value.status_code == 400
        assert PageRequest.of(0, MAX_BOUND).limit == MAX_BOUND

    def test_offset_above_bound_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(offset=MAX_BOUND + 1, limit=10)
        with pytest.raises(InvalidPageRequestError):
            validate_page_request(PageRequest.model_construct(offset=MAX_BOUND + 1, limit=10, sort=()))

    def test_validate_catches_unvalidated_request(self):
        """model_construct로 검증을 건너뛴 요청도 거부."""
        with pytest.raises(InvalidPageRequestError) as exc_info:
            validate_page_request(PageRequest.model_construct(offset=-3, limit=10, sort=()))
        assert exc_info.value.status_code == 400
        with pytest.raises(InvalidPageRequestError):
            validate_page_request(PageRequest.model_construct(offset=0, limit=0, sort=()))


class TestPage:
    """Page 메타데이터 테스트."""

    def test_page_and_pages(self):
        page = Page(items=[1, 2], total=5, offset=2, limit=2)
        assert page.page == 1
        assert page.pages == 3

    def test_empty_total(self):
        page = Page(items=[], total=0, offset=0, limit=10)
        assert page.pages == 0

    def test_computed_fields_serialized(self):
        data = Page(items=["a"], total=1, offset=0, limit=10).model_dump()
        assert data["page"] == 0
        assert data["pages"] == 1


class TestGetPage:
    """COUNT 생략 판정 테스트."""

    async def test_first_short_page_skips_count(self):
        count_fn = AsyncMock(return_value=999)
        page = await get_page([1, 2, 3], PageRequest(offset=0, limit=5), count_fn)
        assert page.total == 3
        count_fn.assert_not_awaited()

    async def test_first_empty_page_skips_count(self):
        count_fn = AsyncMock(return_value=999)
        page = await get_page([], PageRequest(offset=0, limit=5), count_fn)
        assert page.total == 0
        assert page.items == []
        count_fn.assert_not_awaited()

    async def test_first_full_page_counts(self):
        """len(items) == limit이면 더 있을 수 있으므로 COUNT 실행."""
        count_fn = AsyncMock(return_value=4)
        page = await get_page([1, 2], PageRequest(offset=0, limit=2), count_fn)
        assert page.total == 4
        count_fn.assert_awaited_once()

    async def test_later_short_page_counts_by_default(self):
        count_fn = AsyncMock(return_value=4)
        page = await get_page([3, 4], PageRequest(offset=2, limit=3), count_fn)
        assert page.total == 4
        count_fn.assert_awaited_once()

    async def test_later_short_page_skip_when_enabled(self):
        count_fn = AsyncMock(return_value=999)
        page = await get_page([3, 4], PageRequest(offset=2, limit=3), count_fn, skip_last_page_count=True)
        assert page.total == 4
        count_fn.assert_not_awaited()

    async def test_page_beyond_total_counts(self):
        count_fn = AsyncMock(return_value=4)
        page = await get_page([], PageRequest(offset=10, limit=2), count_fn, skip_last_page_count=True)
        assert page.total == 4
        assert page.items == []
        count_fn.assert_awaited_once()

    async def test_invalid_request_fails_before_count(self):
        count_fn = AsyncMock(return_value=0)
        with pytest.raises(InvalidPageRequestError):
            await get_page([], PageRequest.model_construct(offset=0, limit=0, sort=()), count_fn)
        count_fn.assert_not_awaited()
