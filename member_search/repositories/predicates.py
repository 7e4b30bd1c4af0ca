"""회원 검색 조건 조각 및 조합기.

Member search predicate fragments and condition composers.

Each fragment maps one optional filter value to a SQLAlchemy boolean
expression, or to None when the value is absent. None means "omit this
term": Select.where() never sees it.

Two composition strategies yield the same filter:
    - BooleanBuilder: call-local accumulator, AND-ing present terms.
    - where_clause(): fold the ordered fragment results into the list of
      present terms, passed as Select.where(*terms).
"""

from sqlalchemy import ColumnElement, and_, true

from member_search.models.member import Member, Team

# 조건 조각 타입: Optional boolean SQL expression (None = no constraint)
Condition = ColumnElement[bool] | None


def has_text(value: str | None) -> bool:
    """공백이 아닌 문자열인지 확인합니다.

    True when value is not None and not blank after stripping whitespace.
    Shared by every string fragment.
    """
    return value is not None and value.strip() != ""


# ---------------------------------------------------------------------------
# 조건 조각: Predicate fragments
# ---------------------------------------------------------------------------
def username_eq(username: str | None) -> Condition:
    return Member.username == username if has_text(username) else None


def team_name_eq(team_name: str | None) -> Condition:
    return Team.name == team_name if has_text(team_name) else None


def age_goe(age: int | None) -> Condition:
    """나이 >= age (Inclusive lower bound)."""
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> Condition:
    """나이 <= age (Inclusive upper bound)."""
    return Member.age <= age if age is not None else None


# ---------------------------------------------------------------------------
# 조합기: Composers
# ---------------------------------------------------------------------------
class BooleanBuilder:
    """AND 누적기: 한 번의 호출 안에서만 사용.

    Mutable AND accumulator. Create one per query; never share it.

    Example:
        builder = BooleanBuilder()
        builder.and_(username_eq("member1")).and_(age_goe(None))
        query.where(builder.value)
    """

    def __init__(self, initial: Condition = None) -> None:
        self._terms: list[ColumnElement[bool]] = []
        self.and_(initial)

    def and_(self, condition: Condition) -> "BooleanBuilder":
        """조건을 AND로 추가합니다. None은 무시합니다.

        Append a term to the conjunction; None is ignored.
        """
        if condition is not None:
            self._terms.append(condition)
        return self

    @property
    def has_value(self) -> bool:
        return bool(self._terms)

    @property
    def value(self) -> ColumnElement[bool]:
        """누적된 조건: 비어 있으면 항상 참.

        The accumulated conjunction, or the universal predicate when empty.
        """
        if not self._terms:
            return true()
        if len(self._terms) == 1:
            return self._terms[0]
        return and_(*self._terms)


def where_clause(*fragments: Condition) -> list[ColumnElement[bool]]:
    """조건 조각 목록에서 존재하는 항만 남깁니다.

    Keep only the present terms, in order. An empty result means no filter,
    so Select.where(*where_clause(...)) returns every row.
    """
    return [fragment for fragment in fragments if fragment is not None]


def combine(left: Condition, right: Condition) -> Condition:
    """두 조건의 AND: 한쪽이라도 없으면 None.

    Absence-propagating conjunction: combine(None, x) and combine(x, None)
    are None, so an absent operand short-circuits instead of failing.
    """
    if left is None or right is None:
        return None
    return and_(left, right)


def all_of(*fragments: Condition) -> Condition:
    """모든 조건이 존재할 때만 AND로 합칩니다 (combine의 다항 버전).

    N-ary combine(): None if any fragment is absent or none are given.
    """
    if not fragments:
        return None
    result: Condition = fragments[0]
    for fragment in fragments[1:]:
        result = combine(result, fragment)
    return result


def all_present(*fragments: Condition) -> Condition:
    """존재하는 조건만 AND로 합칩니다. 모두 없으면 None.

    Absence-tolerant conjunction of the present fragments; None only when
    every fragment is absent.
    """
    terms = where_clause(*fragments)
    if not terms:
        return None
    if len(terms) == 1:
        return terms[0]
    return and_(*terms)
