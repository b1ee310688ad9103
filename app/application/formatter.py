"""Application layer: renders command results as Slack mrkdwn text."""
from app.domain.commands import (
    Ack, CommandResult, Failure, FailureKind, TeamAddMember, TeamCreate,
    TeamDelete, TeamDelMember, TeamNames, TeamRoster, UserStatus,
)
from app.domain.entities import normalize_user_id

USAGE = (
    "Usage: `/location @user`, `/location <team>`, `/location team list`, "
    "`/location team create|delete <team>`, `/location team <team> add|del @user`"
)


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def format_user_status(result: UserStatus) -> str:
    if result.status:
        return f"{mention(result.id)}: {result.status}"
    return f"{mention(result.id)} has not set a status"


def format_roster(result: TeamRoster) -> str:
    if not result.members:
        return f"Team *{result.name}* has no members"
    lines = [f"*{result.name}*"]
    lines.extend(format_user_status(member) for member in result.members)
    return "\n".join(lines)


def format_team_names(result: TeamNames) -> str:
    if not result.names:
        return "No teams have been created yet"
    return "Teams:\n" + "\n".join(f"• {name}" for name in result.names)


def format_ack(result: Ack) -> str:
    command = result.command
    if isinstance(command, TeamCreate):
        return f"✅ Created team *{command.name}*"
    if isinstance(command, TeamDelete):
        return f"✅ Deleted team *{command.name}*"
    if isinstance(command, TeamAddMember):
        return f"✅ Added {mention(normalize_user_id(command.user))} to *{command.team}*"
    if isinstance(command, TeamDelMember):
        return f"✅ Removed {mention(normalize_user_id(command.user))} from *{command.team}*"
    return "✅ Done"


def format_failure(result: Failure) -> str:
    if result.kind == FailureKind.NOT_FOUND:
        what = (result.detail or "team").capitalize()
        return f"❌ {what} `{result.subject}` not found"
    if result.kind == FailureKind.ALREADY_EXISTS:
        what = (result.detail or "team").capitalize()
        return f"❌ {what} `{result.subject}` already exists"
    if result.kind == FailureKind.INVALID_COMMAND:
        reason = result.detail or "Unrecognized command"
        echo = f": `{result.subject}`" if result.subject.strip() else ""
        return f"❌ {reason}{echo}\n{USAGE}"
    return "❌ Sorry, something went wrong while handling your request. Please try again."


def format_result(result: CommandResult) -> str:
    """Map every result variant to exactly one non-empty string."""
    if isinstance(result, UserStatus):
        return format_user_status(result)
    if isinstance(result, TeamRoster):
        return format_roster(result)
    if isinstance(result, TeamNames):
        return format_team_names(result)
    if isinstance(result, Ack):
        return format_ack(result)
    if isinstance(result, Failure):
        return format_failure(result)
    raise TypeError(f"Unknown command result: {type(result).__name__}")
