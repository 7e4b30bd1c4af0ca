"""샘플 데이터 시드 스크립트: 팀 2개, 회원 4명 생성.

Seed script: Creates two teams and four members for local runs.

Usage:
    python -m member_search.seed

Creates:
    - teamA: member1(10), member2(20)
    - teamB: member3(30), member4(40)
"""

import asyncio

from sqlalchemy import select

from member_search.database import async_session, engine, Base
from member_search.models import Member, Team

SAMPLE_MEMBERS: list[tuple[str, int, str]] = [
    ("member1", 10, "teamA"),
    ("member2", 20, "teamA"),
    ("member3", 30, "teamB"),
    ("member4", 40, "teamB"),
]


async def seed() -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Create tables if missing, then insert the sample teams and members.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if any team exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        teams: dict[str, Team] = {}
        for username, age, team_name in SAMPLE_MEMBERS:
            if team_name not in teams:
                teams[team_name] = Team(name=team_name)
                db.add(teams[team_name])
            db.add(Member(username=username, age=age, team=teams[team_name]))

        await db.commit()
        print(f"Seeded {len(teams)} teams and {len(SAMPLE_MEMBERS)} members.")


if __name__ == "__main__":
    asyncio.run(seed())
