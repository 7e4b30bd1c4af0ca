"""회원 및 팀 관련 SQLAlchemy ORM 모델 정의.

Member and Team SQLAlchemy ORM model definitions.
The query layer only reads these tables; rows are owned by the store.

Tables:
    - teams: 팀 (Teams a member may belong to)
    - members: 회원 (Members, optionally assigned to one team)
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from member_search.database import Base


class Team(Base):
    """팀 모델: 회원이 소속될 수 있는 그룹.

    Team model: Group referenced by zero or more members.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members assigned to this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자: Team unique identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름: Team display name (required)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"


class Member(Base):
    """회원 모델: 팀과 다대일 관계를 가지는 엔티티.

    Member model: Entity with a many-to-one relation to Team.
    username is nullable; null names sort last in the default ordering.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        username: 회원 이름 (Member name, nullable)
        age: 나이 (Numeric attribute used for range filters)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Assigned team, may be None)
    """

    __tablename__ = "members"

    # 회원 고유 식별자: Member unique identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름: Username, null 허용 (Nullable; null names are legal)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    # 나이: Age (required, default 0)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK: Team (SET NULL: 팀 삭제 시 회원은 남음)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team = relationship("Team", back_populates="members")

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다 (back_populates가 Team.members를 갱신).

        Move the member to another team; back_populates keeps Team.members in sync.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"
