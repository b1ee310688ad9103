"""Infrastructure layer: data access for users, teams and memberships.

Every method is a single statement. Callers group them with
``transaction()``, which commits on success and rolls back on any error.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.domain.entities import Membership, Team, TeamId, User
from database.models import MemberRow, TeamRow, UserRow


class StatusRepository(ABC):
    """Repository interface for the status directory."""

    @abstractmethod
    def transaction(self) -> Iterator["StatusRepository"]:
        """Context manager scoping a sequence of calls to one transaction."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def upsert_user_status(self, user_id: str, status: Optional[str]) -> None:
        """Insert the user or overwrite their status."""
        pass

    @abstractmethod
    def ensure_user(self, user_id: str) -> None:
        """Create the user with no status unless they already exist."""
        pass

    @abstractmethod
    def get_team_by_name(self, name: str) -> Optional[Team]:
        pass

    @abstractmethod
    def get_team_by_id(self, team_id: TeamId) -> Optional[Team]:
        pass

    @abstractmethod
    def list_teams(self) -> List[Team]:
        pass

    @abstractmethod
    def create_team(self, name: str) -> Optional[Team]:
        """Create a team; returns None when the name is already taken."""
        pass

    @abstractmethod
    def delete_team(self, team_id: TeamId) -> None:
        pass

    @abstractmethod
    def add_member(self, membership: Membership) -> None:
        """Add a membership; adding an existing member does nothing."""
        pass

    @abstractmethod
    def delete_member(self, membership: Membership) -> None:
        pass

    @abstractmethod
    def delete_team_members(self, team_id: TeamId) -> None:
        pass

    @abstractmethod
    def list_team_members(self, team_name: str) -> List[User]:
        """Members of the named team together with their statuses."""
        pass


class SqlAlchemyStatusRepository(StatusRepository):
    """SQLAlchemy implementation of StatusRepository (SQLite or PostgreSQL)."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _insert(self, table):
        if self.db.get_bind().dialect.name == "postgresql":
            return pg_insert(table)
        return sqlite_insert(table)

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        row = self.db.execute(
            select(UserRow.id, UserRow.status).where(UserRow.id == user_id)
        ).first()
        return User(id=row.id, status=row.status) if row else None

    def upsert_user_status(self, user_id: str, status: Optional[str]) -> None:
        stmt = self._insert(UserRow.__table__).values(id=user_id, status=status)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"], set_={"status": stmt.excluded.status}
        )
        self.db.execute(stmt)

    def ensure_user(self, user_id: str) -> None:
        stmt = self._insert(UserRow.__table__).values(id=user_id, status=None)
        self.db.execute(stmt.on_conflict_do_nothing(index_elements=["id"]))

    # Teams

    def get_team_by_name(self, name: str) -> Optional[Team]:
        row = self.db.execute(
            select(TeamRow.id, TeamRow.name).where(TeamRow.name == name)
        ).first()
        return Team(id=TeamId(row.id), name=row.name) if row else None

    def get_team_by_id(self, team_id: TeamId) -> Optional[Team]:
        row = self.db.execute(
            select(TeamRow.id, TeamRow.name).where(TeamRow.id == team_id)
        ).first()
        return Team(id=TeamId(row.id), name=row.name) if row else None

    def list_teams(self) -> List[Team]:
        rows = self.db.execute(select(TeamRow.id, TeamRow.name).order_by(TeamRow.id)).all()
        return [Team(id=TeamId(row.id), name=row.name) for row in rows]

    def create_team(self, name: str) -> Optional[Team]:
        stmt = self._insert(TeamRow.__table__).values(name=name)
        result = self.db.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))
        if result.rowcount == 0:
            return None
        return self.get_team_by_name(name)

    def delete_team(self, team_id: TeamId) -> None:
        self.db.execute(delete(TeamRow).where(TeamRow.id == team_id))

    # Memberships

    def add_member(self, membership: Membership) -> None:
        stmt = self._insert(MemberRow.__table__).values(
            user_id=membership.user_id, team_id=membership.team_id
        )
        self.db.execute(stmt.on_conflict_do_nothing(index_elements=["user_id", "team_id"]))

    def delete_member(self, membership: Membership) -> None:
        self.db.execute(
            delete(MemberRow).where(
                MemberRow.team_id == membership.team_id, MemberRow.user_id == membership.user_id
            )
        )

    def delete_team_members(self, team_id: TeamId) -> None:
        self.db.execute(delete(MemberRow).where(MemberRow.team_id == team_id))

    def list_team_members(self, team_name: str) -> List[User]:
        rows = self.db.execute(
            select(MemberRow.user_id, UserRow.status)
            .join(TeamRow, MemberRow.team_id == TeamRow.id)
            .join(UserRow, UserRow.id == MemberRow.user_id)
            .where(TeamRow.name == team_name)
            .order_by(MemberRow.user_id)
        ).all()
        return [User(id=row.user_id, status=row.status) for row in rows]
