"""기본 조회 레포지토리: 모든 레포지토리의 부모 클래스.

Base Read Repository: Parent class for all domain repositories.
Provides generic read operations. The query layer never writes, so no
create/update/delete helpers live here.

Usage:
    class MemberRepository(BaseRepository[Member]):
        def __init__(self) -> None:
            super().__init__(Member)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.database import Base

# 제네릭 타입 변수: SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 조회 레포지토리.

    Generic read repository providing common database queries.
    The session is passed into every call; the repository holds no state
    besides the model class.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 ID (ID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """모든 레코드를 조회합니다.

        Retrieve every record of the model's table.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            order_by: 정렬 기준 컬럼 (Column to order by)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of records)
        """
        query: Select = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    async def count_all(self, db: AsyncSession) -> int:
        """전체 레코드 수를 조회합니다.

        Count every row of the model's table.
        """
        query: Select = select(func.count()).select_from(self.model)
        return (await db.execute(query)).scalar() or 0
