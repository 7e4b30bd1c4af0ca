"""FastAPI 애플리케이션 엔트리포인트: 미들웨어 및 라우터 등록.

FastAPI application entry point: Middleware and router registration.
"""

from fastapi import FastAPI

from member_search.api import api_router
from member_search.config import settings
from member_search.middleware.axiom_logging import AxiomLoggingMiddleware
from member_search.utils.logging import configure_logging

configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어: Axiom API request/response logging
app.add_middleware(AxiomLoggingMiddleware)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
