"""회원 검색 Pydantic 스키마 정의.

Member search Pydantic schema definitions.
Includes the search condition value object, the flattened member+team
projection returned by search queries, and the plain member response.
"""

from pydantic import BaseModel


class MemberSearchCondition(BaseModel):
    """회원 검색 조건: 모든 필드는 선택값.

    Caller-supplied search condition. Every field is optional and
    None (or a blank string) means "no constraint".

    Attributes:
        username: 회원 이름 일치 (Exact username match)
        team_name: 팀 이름 일치 (Exact team name match)
        age_goe: 나이 하한, 포함 (Inclusive lower age bound)
        age_loe: 나이 상한, 포함 (Inclusive upper age bound)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None  # 나이 >= (greater or equal)
    age_loe: int | None = None  # 나이 <= (less or equal)

    model_config = {"frozen": True}


class MemberTeamDto(BaseModel):
    """회원+팀 평탄화 결과 스키마.

    Flattened member + team projection. Team fields are None for
    members without a team (left outer join).
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None = None
    team_name: str | None = None

    model_config = {"frozen": True}


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Plain member response for find_all / find_by_username.
    """

    id: int
    username: str | None
    age: int
    team_id: int | None = None

    model_config = {"from_attributes": True}
