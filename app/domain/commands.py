"""Domain layer: parsed `/location` commands and their results."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from app.infrastructure.repositories import StatusRepository


# --- Commands -------------------------------------------------------------

@dataclass(frozen=True)
class QueryUser:
    name: str


@dataclass(frozen=True)
class QueryTeam:
    name: str
    # A bare name may also be a user id; `team <name>` is unambiguous
    fallback_to_user: bool = True


@dataclass(frozen=True)
class TeamList:
    pass


@dataclass(frozen=True)
class TeamCreate:
    name: str


@dataclass(frozen=True)
class TeamDelete:
    name: str


@dataclass(frozen=True)
class TeamAddMember:
    team: str
    user: str


@dataclass(frozen=True)
class TeamDelMember:
    team: str
    user: str


@dataclass(frozen=True)
class ParseError:
    reason: str
    text: str = ""


Command = Union[
    QueryUser, QueryTeam, TeamList, TeamCreate, TeamDelete,
    TeamAddMember, TeamDelMember, ParseError,
]


# --- Results --------------------------------------------------------------

class FailureKind(str, Enum):
    INVALID_COMMAND = "invalid_command"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class UserStatus:
    id: str
    status: Optional[str] = None


@dataclass(frozen=True)
class TeamRoster:
    name: str
    members: List[UserStatus] = field(default_factory=list)


@dataclass(frozen=True)
class TeamNames:
    names: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Ack:
    """Successful mutation; carries the command that was applied."""
    command: Command


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    subject: str = ""
    detail: str = ""


CommandResult = Union[UserStatus, TeamRoster, TeamNames, Ack, Failure]


class CommandHandler(ABC):
    """Handler interface for executing one kind of command."""

    @abstractmethod
    def handle(self, command: Command, repo: "StatusRepository") -> CommandResult:
        """Apply the command against the repository."""
        pass
