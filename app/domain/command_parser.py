"""Domain layer: turns the text after `/location` into a command.

Grammar (whitespace separated, keywords are case-sensitive)::

    @user                   -> QueryUser
    name                    -> QueryTeam (falls back to a user lookup)
    team list               -> TeamList
    team create <name>      -> TeamCreate
    team delete <name>      -> TeamDelete
    team <name>             -> QueryTeam (no fallback)
    team <name> add <user>  -> TeamAddMember
    team <name> del <user>  -> TeamDelMember

Anything else is a ParseError. Parsing never touches the store and never raises.
"""
from typing import List

from app.domain.commands import (
    Command, ParseError, QueryTeam, QueryUser, TeamAddMember, TeamCreate,
    TeamDelete, TeamDelMember, TeamList,
)
from app.domain.entities import normalize_user_id

TEAM_KEYWORD = "team"
USER_SIGILS = ("@", "<@")


class CommandParser:
    """Tokenizes and classifies `/location` payloads."""

    def parse(self, text: str) -> Command:
        tokens = (text or "").split()
        if not tokens:
            return ParseError("Please supply a user, a team or a command", text or "")
        if tokens[0] == TEAM_KEYWORD:
            return self._parse_team(tokens[1:], text)
        if len(tokens) > 1:
            return ParseError("Too many words for a lookup", text)
        return self._parse_lookup(tokens[0], text)

    def _parse_lookup(self, token: str, text: str) -> Command:
        if token.startswith(USER_SIGILS):
            if not normalize_user_id(token):
                return ParseError("Missing user name after @", text)
            return QueryUser(token)
        return QueryTeam(token)

    def _parse_team(self, args: List[str], text: str) -> Command:
        if not args:
            return ParseError("Please supply a team name or command", text)

        head = args[0]
        if head == "list":
            if len(args) != 1:
                return ParseError("`team list` takes no arguments", text)
            return TeamList()
        if head in ("create", "delete"):
            if len(args) != 2:
                return ParseError(f"`team {head}` takes exactly one team name", text)
            return TeamCreate(args[1]) if head == "create" else TeamDelete(args[1])

        if len(args) == 1:
            return QueryTeam(head, fallback_to_user=False)
        if len(args) == 3 and args[1] in ("add", "del"):
            if not normalize_user_id(args[2]):
                return ParseError("Missing user name", text)
            if args[1] == "add":
                return TeamAddMember(team=head, user=args[2])
            return TeamDelMember(team=head, user=args[2])
        return ParseError("Unrecognized team command", text)


# Default parser instance
default_parser = CommandParser()


def parse_command(text: str) -> Command:
    return default_parser.parse(text)
