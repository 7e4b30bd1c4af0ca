"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures one structured event per search request: endpoint, method,
search/page query parameters, status code, duration and error reason.
Events go to Axiom when AXIOM_API_TOKEN and AXIOM_DATASET are set, and to
the stdlib "member_search.access" logger otherwise.
"""

import json
import logging
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from member_search.config import settings

logger = logging.getLogger("member_search.access")

# 로깅 제외 경로: Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 검색 관련 쿼리 파라미터: Query parameters recorded as search fields
_SEARCH_PARAMS = ("username", "team_name", "age_goe", "age_loe", "page", "size")


def _search_fields(query_params: dict[str, str]) -> dict[str, Any]:
    """검색 조건 추출: Keep only the known search/page parameters, truncated."""
    return {
        key: value[:200]
        for key, value in query_params.items()
        if key in _SEARCH_PARAMS
    }


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출: Extract the error reason from a response body."""
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        detail = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        detail = body.decode("utf-8", errors="replace")
    return detail[:500]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 검색 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every search request and its outcome.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵: Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
        }
        search = _search_fields(dict(request.query_params))
        if search:
            event["search"] = search

        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출: Extract error detail from error responses
            if status_code >= 400:
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = _error_detail(body)

                # 소비한 body를 다시 응답으로 반환: Re-wrap consumed body
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.time() - start_time) * 1000, 2)
            self._emit(event)

        return response

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            logger.info("%s %s %s", event["method"], event["path"], event["status_code"], extra={"event": event})
            return
        # Axiom 전송: Send to Axiom
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록: Never break request on log failure
            logger.warning("axiom ingest failed for %s", event["path"], exc_info=True)
