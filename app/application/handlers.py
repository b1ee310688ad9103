"""Application layer: command handlers implementing the directory rules."""
import logging
from typing import Optional

from app.domain.commands import (
    Ack, CommandHandler, Failure, FailureKind, ParseError, QueryTeam, QueryUser,
    TeamAddMember, TeamCreate, TeamDelete, TeamDelMember, TeamList, TeamNames,
    TeamRoster, UserStatus,
)
from app.domain.entities import Membership, normalize_user_id
from app.infrastructure.repositories import StatusRepository

logger = logging.getLogger(__name__)


def _team_not_found(name: str) -> Failure:
    return Failure(FailureKind.NOT_FOUND, subject=name, detail="team")


def _roster(repo: StatusRepository, name: str) -> TeamRoster:
    members = [UserStatus(id=u.id, status=u.status) for u in repo.list_team_members(name)]
    return TeamRoster(name=name, members=members)


class QueryUserHandler(CommandHandler):
    """A user without a recorded status is still a valid answer."""

    def handle(self, command: QueryUser, repo: StatusRepository):
        user_id = normalize_user_id(command.name)
        user = repo.get_user(user_id)
        return UserStatus(id=user_id, status=user.status if user else None)


class QueryTeamHandler(CommandHandler):
    """Resolves a name as a team first, then (for bare names) as a user.

    Team names win when a team and a user share the same name.
    """

    def handle(self, command: QueryTeam, repo: StatusRepository):
        team = repo.get_team_by_name(command.name)
        if team is not None:
            return _roster(repo, team.name)

        if command.fallback_to_user:
            user = self._resolve_user(command.name, repo)
            if user is not None:
                return user
            return Failure(FailureKind.NOT_FOUND, subject=command.name, detail="team or user")
        return _team_not_found(command.name)

    def _resolve_user(self, name: str, repo: StatusRepository) -> Optional[UserStatus]:
        user_id = normalize_user_id(name)
        if not user_id:
            return None
        user = repo.get_user(user_id)
        if user is None:
            return None
        logger.debug(f"No team named {name}, answered with user {user_id}")
        return UserStatus(id=user.id, status=user.status)


class TeamListHandler(CommandHandler):
    def handle(self, command: TeamList, repo: StatusRepository):
        return TeamNames(names=[team.name for team in repo.list_teams()])


class TeamCreateHandler(CommandHandler):
    def handle(self, command: TeamCreate, repo: StatusRepository):
        team = repo.create_team(command.name)
        if team is None:
            return Failure(FailureKind.ALREADY_EXISTS, subject=command.name, detail="team")
        logger.info(f"Created team {team.name} (id={team.id})")
        return Ack(command)


class TeamDeleteHandler(CommandHandler):
    """Memberships go first so the team row never outlives them mid-transaction."""

    def handle(self, command: TeamDelete, repo: StatusRepository):
        team = repo.get_team_by_name(command.name)
        if team is None:
            return _team_not_found(command.name)
        repo.delete_team_members(team.id)
        repo.delete_team(team.id)
        logger.info(f"Deleted team {team.name} (id={team.id})")
        return Ack(command)


class TeamAddMemberHandler(CommandHandler):
    def handle(self, command: TeamAddMember, repo: StatusRepository):
        team = repo.get_team_by_name(command.team)
        if team is None:
            return _team_not_found(command.team)
        user_id = normalize_user_id(command.user)
        repo.ensure_user(user_id)
        repo.add_member(Membership(user_id=user_id, team_id=team.id))
        return Ack(command)


class TeamDelMemberHandler(CommandHandler):
    def handle(self, command: TeamDelMember, repo: StatusRepository):
        team = repo.get_team_by_name(command.team)
        if team is None:
            return _team_not_found(command.team)
        repo.delete_member(Membership(user_id=normalize_user_id(command.user), team_id=team.id))
        return Ack(command)


class ParseErrorHandler(CommandHandler):
    def handle(self, command: ParseError, repo: StatusRepository):
        return Failure(FailureKind.INVALID_COMMAND, subject=command.text, detail=command.reason)


HANDLERS = {
    QueryUser: QueryUserHandler(),
    QueryTeam: QueryTeamHandler(),
    TeamList: TeamListHandler(),
    TeamCreate: TeamCreateHandler(),
    TeamDelete: TeamDeleteHandler(),
    TeamAddMember: TeamAddMemberHandler(),
    TeamDelMember: TeamDelMemberHandler(),
    ParseError: ParseErrorHandler(),
}


def get_handler(command) -> CommandHandler:
    return HANDLERS[type(command)]
