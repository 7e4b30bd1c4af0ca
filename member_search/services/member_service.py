"""회원 서비스: 회원 검색 비즈니스 로직.

Member Service: Search and pagination logic between the HTTP layer and
the member repository. Converts ORM members to response schemas and
applies the default sort and page size bounds.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from member_search.config import settings
from member_search.models.member import Member
from member_search.repositories.member_repository import MEMBER_DEFAULT_SORT, member_repository
from member_search.schemas.member import MemberResponse, MemberSearchCondition, MemberTeamDto
from member_search.utils.exceptions import InvalidPageRequestError
from member_search.utils.pagination import Page, PageRequest


class MemberService:
    """회원 조회 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member read operations.
    """

    def _to_response(self, member: Member) -> MemberResponse:
        return MemberResponse(
            id=member.id,
            username=member.username,
            age=member.age,
            team_id=member.team_id,
        )

    def page_request(self, page: int, size: int | None = None) -> PageRequest:
        """페이지 번호/크기로 기본 정렬이 적용된 요청을 만듭니다.

        Build a PageRequest from a 0-based page number and a page size,
        using the default page size and the default member ordering.

        Raises:
            InvalidPageRequestError: 페이지 크기가 최대값 초과 (Size above MAX_PAGE_SIZE)
        """
        page_size: int = size if size is not None else settings.DEFAULT_PAGE_SIZE
        if page_size > settings.MAX_PAGE_SIZE:
            raise InvalidPageRequestError(f"size must not exceed {settings.MAX_PAGE_SIZE}")
        return PageRequest.of(page, page_size, MEMBER_DEFAULT_SORT)

    async def list_members(
        self,
        db: AsyncSession,
        username: str | None = None,
    ) -> list[MemberResponse]:
        """회원 목록을 조회합니다 (이름 지정 시 정확히 일치).

        List all members, or only those whose username matches exactly.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 회원 이름 (Exact username, optional)

        Returns:
            list[MemberResponse]: 회원 목록 (List of member responses)
        """
        if username is None:
            members: list[Member] = await member_repository.find_all(db)
        else:
            members = await member_repository.find_by_username(db, username)
        return [self._to_response(m) for m in members]

    async def search_members(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """조건으로 회원+팀을 검색합니다.

        Search members joined to teams, in the default member ordering.
        """
        return await member_repository.search(db, condition, MEMBER_DEFAULT_SORT)

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        return await member_repository.search_page_simple(db, condition, page_request)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """전체 개수 생략 최적화가 적용된 페이지 검색.

        Page search with the count-skip optimization.
        """
        return await member_repository.search_page_complex(db, condition, page_request)


# 싱글턴 인스턴스: Singleton instance
member_service: MemberService = MemberService()
