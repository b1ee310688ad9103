"""Pydantic models for Slack request bodies.

Fields Slack always sends but the bot never reads are still declared so the
payload shape is documented in one place.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class SlashCommand(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Deprecated verification token (signed secrets replace it)
    token: Optional[str] = None
    # The slash command that was typed (e.g. /location)
    command: str = "/location"
    # The text following the slash command
    text: str = ""
    response_url: Optional[str] = None
    trigger_id: Optional[str] = None
    # The ID of the user who triggered the command
    user_id: Optional[str] = None
    # Being phased out by Slack; prefer user_id
    user_name: Optional[str] = None
    team_id: Optional[str] = None
    channel_id: Optional[str] = None
    api_app_id: Optional[str] = None


class SlackEvent(BaseModel):
    """Inner event of an `event_callback` (message or app_mention)."""
    model_config = ConfigDict(extra="ignore")

    type: str
    user: Optional[str] = None
    text: Optional[str] = None
    channel: Optional[str] = None
    ts: Optional[str] = None
    event_ts: Optional[str] = None
    channel_type: Optional[str] = None
    # Edits, deletions and bot posts carry a subtype
    subtype: Optional[str] = None
    bot_id: Optional[str] = None


class SlackEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    token: Optional[str] = None
    challenge: Optional[str] = None
    team_id: Optional[str] = None
    api_app_id: Optional[str] = None
    event: Optional[SlackEvent] = None
    authed_users: List[str] = Field(default_factory=list)
    event_id: Optional[str] = None
    event_time: Optional[int] = None


class BlocksResponse(BaseModel):
    blocks: List[dict]

    @classmethod
    def from_text(cls, text: str) -> "BlocksResponse":
        return cls(blocks=[{"type": "section", "text": {"type": "mrkdwn", "text": text}}])
