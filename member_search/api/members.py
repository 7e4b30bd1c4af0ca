"""회원 검색 라우터: 조건 검색 및 페이지 검색 엔드포인트.

Member Search Router: Condition search and paged search endpoints.

    GET /v1/members      조건 검색 (search, default ordering)
    GET /v1/members/all  전체/이름 조회 (find_all / find_by_username)
    GET /v2/members      페이지 검색, 항상 COUNT (always counts)
    GET /v3/members      페이지 검색, COUNT 생략 최적화 (count-skip)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.database import get_db
from member_search.schemas.member import MemberResponse, MemberSearchCondition, MemberTeamDto
from member_search.services.member_service import member_service
from member_search.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


def search_condition(
    username: str | None = None,
    team_name: str | None = None,
    age_goe: int | None = None,
    age_loe: int | None = None,
) -> MemberSearchCondition:
    """쿼리 파라미터를 검색 조건으로 변환합니다.

    Build a MemberSearchCondition from query parameters.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def page_request(
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int | None, Query(gt=0)] = None,
) -> PageRequest:
    return member_service.page_request(page, size)


@router.get("/v1/members", response_model=list[MemberTeamDto])
async def search_members(
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberTeamDto]:
    """조건으로 회원을 검색합니다.

    Search members joined to their team.
    """
    return await member_service.search_members(db, condition)


@router.get("/v1/members/all", response_model=list[MemberResponse])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    username: str | None = None,
) -> list[MemberResponse]:
    """회원 목록을 조회합니다.

    List all members, or those with exactly the given username.
    """
    return await member_service.list_members(db, username)


@router.get("/v2/members", response_model=Page[MemberTeamDto])
async def search_members_page_simple(
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    pageable: Annotated[PageRequest, Depends(page_request)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Page[MemberTeamDto]:
    """회원 페이지 검색: 항상 전체 개수 조회.

    Paged member search that always runs the count query.
    """
    return await member_service.search_page_simple(db, condition, pageable)


@router.get("/v3/members", response_model=Page[MemberTeamDto])
async def search_members_page(
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    pageable: Annotated[PageRequest, Depends(page_request)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Page[MemberTeamDto]:
    """회원 페이지 검색: 필요할 때만 전체 개수 조회.

    Paged member search with the count-skip optimization.
    """
    return await member_service.search_page(db, condition, pageable)
