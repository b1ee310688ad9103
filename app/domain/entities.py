"""Domain layer: users, teams and memberships as plain values."""
from dataclasses import dataclass
from typing import NewType, Optional

# Store-assigned team key; 32-bit on SQLite, 64-bit on PostgreSQL.
TeamId = NewType("TeamId", int)


def normalize_user_id(raw: str) -> str:
    """Reduce a Slack mention (``<@U123|alice>``, ``@U123``) to the bare id."""
    return raw.strip().strip("<>@").split("|", 1)[0]


@dataclass(frozen=True)
class User:
    id: str
    # None means the user never reported a status
    status: Optional[str] = None


@dataclass(frozen=True)
class Team:
    id: TeamId
    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("team name must not be empty")


@dataclass(frozen=True)
class Membership:
    user_id: str
    team_id: TeamId
