"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the request errors
the query layer can detect before touching the database. Storage errors
(sqlalchemy.exc.SQLAlchemyError) are never wrapped here; they propagate
to the caller unchanged.

Usage:
    from member_search.utils.exceptions import InvalidPageRequestError
    raise InvalidPageRequestError("limit must be positive")
"""

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """400 Bad Request 예외: 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidPageRequestError(BadRequestError):
    """잘못된 페이지 요청: 음수 offset 또는 0 이하 limit.

    Raised for a negative offset or a non-positive limit, before any query runs.
    """

    def __init__(self, detail: str = "Invalid page request") -> None:
        super().__init__(detail=detail)


class InvalidSortError(BadRequestError):
    """정렬 불가능한 필드: Unknown sort field."""

    def __init__(self, detail: str = "Invalid sort field") -> None:
        super().__init__(detail=detail)
