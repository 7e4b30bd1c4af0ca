"""회원 레포지토리: 동적 조건 검색 및 페이지네이션 쿼리.

Member Repository: Dynamic-condition search and pagination queries.
Joins members to their team with a LEFT OUTER JOIN (members without a team
are kept, with None team fields) and projects rows into MemberTeamDto.

Every method takes the caller's AsyncSession; the main query and the
count query of a page therefore run inside the same transaction.
Storage errors (sqlalchemy.exc.SQLAlchemyError) propagate unchanged.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, UnaryExpression, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models.member import Member, Team
from member_search.repositories.base import BaseRepository
from member_search.repositories.predicates import (
    BooleanBuilder,
    age_goe,
    age_loe,
    team_name_eq,
    username_eq,
    where_clause,
)
from member_search.schemas.member import MemberSearchCondition, MemberTeamDto
from member_search.utils.exceptions import InvalidSortError
from member_search.utils.pagination import (
    Page,
    PageRequest,
    SortTerm,
    get_page,
    paginate,
    validate_page_request,
)

logger = logging.getLogger(__name__)

# 정렬 가능 필드: Sortable fields (DTO field name → column)
SORTABLE_COLUMNS: dict[str, ColumnElement] = {
    "member_id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_id": Team.id,
    "team_name": Team.name,
}

# 기본 정렬: 나이 내림차순, 이름 오름차순 (이름 없으면 마지막)
# Default ordering: age desc, then username asc with null names last
MEMBER_DEFAULT_SORT: tuple[SortTerm, ...] = (
    SortTerm(field="age", direction="desc"),
    SortTerm(field="username", direction="asc", nulls_last=True),
)


def order_by_clauses(sort: Sequence[SortTerm]) -> list[UnaryExpression]:
    """정렬 조건을 ORDER BY 절로 변환합니다.

    Translate sort terms into ORDER BY expressions.

    Raises:
        InvalidSortError: 허용되지 않은 필드 (Field not in SORTABLE_COLUMNS)
    """
    clauses: list[UnaryExpression] = []
    for term in sort:
        column = SORTABLE_COLUMNS.get(term.field)
        if column is None:
            raise InvalidSortError(f"Cannot sort by '{term.field}'")
        clause = column.desc() if term.direction == "desc" else column.asc()
        if term.nulls_last:
            clause = clause.nulls_last()
        clauses.append(clause)
    return clauses


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # -----------------------------------------------------------------------
    # 엔티티 조회: Entity queries
    # -----------------------------------------------------------------------
    async def find_all(self, db: AsyncSession) -> list[Member]:
        """모든 회원을 id 순으로 조회합니다.

        Fetch every member, unconditioned, ordered by id.
        """
        return list(await self.get_all(db, order_by=Member.id))

    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """이름이 정확히 일치하는 회원을 조회합니다.

        Fetch members whose username equals the argument exactly.
        """
        query: Select = select(Member).where(Member.username == username)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_all_page(self, db: AsyncSession, page_request: PageRequest) -> Page[Any]:
        """회원 엔티티를 id 순으로 페이지 조회합니다.

        Page through member entities ordered by id. Items are Member ORM
        objects, so the page is typed Page[Any] like paginate's result.
        """
        query: Select = select(Member).order_by(Member.id)
        return await paginate(db, query, page_request)

    # -----------------------------------------------------------------------
    # 동적 조건 검색: Dynamic condition search
    # -----------------------------------------------------------------------
    def _member_team_query(self) -> Select:
        """회원 LEFT JOIN 팀 프로젝션 쿼리: Member LEFT JOIN Team projection."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
        )

    def _conditions(self, condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
        return where_clause(
            username_eq(condition.username),
            team_name_eq(condition.team_name),
            age_goe(condition.age_goe),
            age_loe(condition.age_loe),
        )

    async def _fetch_dtos(self, db: AsyncSession, query: Select) -> list[MemberTeamDto]:
        result = await db.execute(query)
        return [MemberTeamDto.model_validate(dict(row._mapping)) for row in result]

    async def search_by_builder(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """BooleanBuilder로 조건을 누적하여 검색합니다.

        Search with the accumulator strategy. The builder is local to
        this call; with no live constraint it yields the universal predicate.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)

        Returns:
            list[MemberTeamDto]: 회원+팀 결과 (Flattened member+team rows)
        """
        builder = BooleanBuilder()
        builder.and_(username_eq(condition.username))
        builder.and_(team_name_eq(condition.team_name))
        builder.and_(age_goe(condition.age_goe))
        builder.and_(age_loe(condition.age_loe))

        query: Select = self._member_team_query().where(builder.value)
        return await self._fetch_dtos(db, query)

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: Sequence[SortTerm] = (),
    ) -> list[MemberTeamDto]:
        """where 파라미터 방식으로 검색합니다.

        Search with the parameter strategy: each fragment is a separate
        where() term and absent fragments are dropped.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            sort: 정렬 조건, 비어 있으면 DB 기본 순서 (Sort terms; storage order when empty)

        Returns:
            list[MemberTeamDto]: 회원+팀 결과 (Flattened member+team rows)

        Raises:
            InvalidSortError: 허용되지 않은 정렬 필드 (Unknown sort field)
        """
        order_by = order_by_clauses(sort)
        query: Select = self._member_team_query().where(*self._conditions(condition))
        if order_by:
            query = query.order_by(*order_by)
        return await self._fetch_dtos(db, query)

    async def count(self, db: AsyncSession, condition: MemberSearchCondition) -> int:
        """조건에 맞는 회원-팀 쌍의 수를 조회합니다.

        Count matching member/team pairs under the same filter, without
        projection or ordering. The join stays so team-name filters apply.
        """
        query: Select = (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*self._conditions(condition))
        )
        return (await db.execute(query)).scalar() or 0

    def _page_query(self, condition: MemberSearchCondition, page_request: PageRequest) -> Select:
        query: Select = self._member_team_query().where(*self._conditions(condition))
        order_by = order_by_clauses(page_request.sort)
        if order_by:
            query = query.order_by(*order_by)
        return query.offset(page_request.offset).limit(page_request.limit)

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """항상 전체 개수를 함께 조회하는 페이지 검색.

        Page search that always issues the count query.

        Raises:
            InvalidPageRequestError: 잘못된 offset/limit (Before any query)
            InvalidSortError: 허용되지 않은 정렬 필드 (Before any query)
        """
        validate_page_request(page_request)
        query: Select = self._page_query(condition, page_request)

        total: int = await self.count(db, condition)
        items: list[MemberTeamDto] = await self._fetch_dtos(db, query)
        logger.debug("search_page_simple: %d rows, total=%d", len(items), total)

        return Page(items=items, total=total, offset=page_request.offset, limit=page_request.limit)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """필요할 때만 전체 개수를 조회하는 페이지 검색.

        Page search with the count-skip optimization: the count query runs
        only when the fetched page cannot prove the total (see get_page).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Offset/limit/sort)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page with exact total)

        Raises:
            InvalidPageRequestError: 잘못된 offset/limit (Before any query)
            InvalidSortError: 허용되지 않은 정렬 필드 (Before any query)
        """
        validate_page_request(page_request)
        query: Select = self._page_query(condition, page_request)

        items: list[MemberTeamDto] = await self._fetch_dtos(db, query)

        async def _count() -> int:
            return await self.count(db, condition)

        return await get_page(items, page_request, _count)


# 싱글턴 인스턴스: Singleton instance
member_repository: MemberRepository = MemberRepository()
