"""Slack transport: the `/location` slash command and the Events API endpoint.

Slack disables apps whose endpoints keep failing, so malformed payloads are
logged and still answered with 200 OK.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app import services
from app.application.command_processor import LocationCommandProcessor
from app.application.status_updates import StatusRecorder, strip_bot_mention
from app.config import get_settings
from app.infrastructure.repositories import SqlAlchemyStatusRepository
from app.schemas import BlocksResponse, SlackEnvelope, SlackEvent, SlashCommand
from database.connection import get_db

router = APIRouter(tags=["slack"])
logger = logging.getLogger(__name__)


@router.post("/location")
async def location_command(request: Request, db: Session = Depends(get_db)):
    try:
        form = await request.form()
        command = SlashCommand(**{key: value for key, value in form.items() if isinstance(value, str)})
    except (ValidationError, ValueError) as e:
        logger.error(f"Failed to parse location request: {e}")
        return JSONResponse(status_code=200, content={})

    reply = LocationCommandProcessor.for_session(db).process(command.text)
    return BlocksResponse.from_text(reply).model_dump()


@router.post("/")
async def slack_events(request: Request, db: Session = Depends(get_db)):
    try:
        envelope = SlackEnvelope.model_validate(await request.json())
    except (ValidationError, ValueError) as e:
        logger.error(f"Callback parse error: {e}")
        return {"status": "ignored"}

    if envelope.type == "url_verification":
        return _url_verification(envelope)
    if envelope.type == "event_callback" and envelope.event is not None:
        await _handle_event(envelope.event, db)
        return {"status": "processed"}

    logger.info(f"Ignoring Slack payload of type {envelope.type}")
    return {"status": "ignored"}


def _url_verification(envelope: SlackEnvelope):
    settings = get_settings()
    expected = settings.slack_verification_token
    if expected is None and settings.environment not in ("production", "staging"):
        logger.warning("SLACK_VERIFICATION_TOKEN not set; accepting url_verification")
    elif expected is None or envelope.token != expected:
        logger.warning("url_verification token mismatch")
        return JSONResponse(status_code=400, content={"error": "invalid token"})
    return {"challenge": envelope.challenge}


async def _handle_event(event: SlackEvent, db: Session) -> None:
    if event.subtype or event.bot_id or not event.user or not event.text:
        logger.debug(f"Skipping {event.type} event (subtype={event.subtype})")
        return

    settings = get_settings()
    recorder = StatusRecorder(SqlAlchemyStatusRepository(db), settings.status_channel)

    if event.type == "message":
        if not recorder.accepts_channel(event.channel):
            return
        # Passive monitor: statuses are recorded silently
        recorder.record(event.user, event.text)
    elif event.type == "app_mention":
        status = strip_bot_mention(event.text, settings.bot_name)
        if recorder.record(event.user, status) and event.channel and event.event_ts:
            await services.slack_client.add_reaction(event.channel, event.event_ts)
    else:
        logger.info(f"Ignoring unsupported event type {event.type}")
