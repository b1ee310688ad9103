from sqlalchemy import BigInteger, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import declarative_base

# SQLite only auto-increments an INTEGER PRIMARY KEY; PostgreSQL gets BIGSERIAL.
TeamIdType = BigInteger().with_variant(Integer(), "sqlite")

Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    status = Column(Text, nullable=True)

    def __repr__(self):
        return f"<UserRow(id={self.id}, status={self.status!r})>"


class TeamRow(Base):
    __tablename__ = "teams"

    id = Column(TeamIdType, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)

    def __repr__(self):
        return f"<TeamRow(id={self.id}, name={self.name})>"


class MemberRow(Base):
    """Membership of a user in a team; the pair is the key."""
    __tablename__ = "members"

    user_id = Column(Text, ForeignKey("users.id"), primary_key=True)
    team_id = Column(TeamIdType, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True)

    def __repr__(self):
        return f"<MemberRow(user_id={self.user_id}, team_id={self.team_id})>"
