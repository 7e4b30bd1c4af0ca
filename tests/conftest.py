"""테스트 인프라: 테스트 DB 엔진, 세션, 쿼리 기록기, httpx 클라이언트 픽스처.

Test infrastructure: Test DB engine, session, query recorder and httpx client fixtures.
TEST_DATABASE_URL selects the database; the default is an in-memory SQLite
database (aiosqlite) created fresh for every test.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from member_search.database import Base, get_db  # noqa: E402
from member_search.main import app  # noqa: E402
from member_search.models import Member, Team  # noqa: E402

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _engine_options(url: str) -> dict:
    # 인메모리 SQLite는 단일 커넥션을 공유해야 스키마가 유지됨
    if url.startswith("sqlite"):
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 쿼리 기록기, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 만들고 종료 시 삭제합니다."""
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_options(TEST_DATABASE_URL))

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture
def query_log(engine: AsyncEngine) -> list[str]:
    """엔진에서 실행된 SQL 문을 순서대로 기록합니다."""
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany) -> None:
        statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine.sync_engine, "before_cursor_execute", _record)


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트: DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    result = {name: Team(name=name) for name in ("teamA", "teamB")}
    db.add_all(result.values())
    await db.flush()
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams: dict[str, Team], query_log: list[str]) -> dict[str, Member]:
    """member1~4를 생성합니다 (teamA: 10, 20 / teamB: 30, 40).

    기록된 시드 쿼리는 비워서 테스트가 자신의 쿼리만 보도록 합니다.
    """
    result: dict[str, Member] = {}
    for username, age, team_name in [
        ("member1", 10, "teamA"),
        ("member2", 20, "teamA"),
        ("member3", 30, "teamB"),
        ("member4", 40, "teamB"),
    ]:
        member = Member(username=username, age=age, team=teams[team_name])
        db.add(member)
        result[username] = member
    await db.flush()
    query_log.clear()
    return result


@pytest_asyncio.fixture
async def teamless_member(db: AsyncSession, members: dict[str, Member], query_log: list[str]) -> Member:
    """팀이 없는 회원을 생성합니다."""
    member = Member(username="loner", age=50)
    db.add(member)
    await db.flush()
    query_log.clear()
    return member


def count_queries(statements: list[str]) -> list[str]:
    """기록된 SQL 중 COUNT 쿼리만 반환합니다."""
    return [s for s in statements if "count(" in s.lower()]
