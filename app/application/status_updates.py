"""Application layer: records statuses posted in chat (passive channel monitor)."""
import logging
import re
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import normalize_user_id
from app.infrastructure.repositories import StatusRepository

logger = logging.getLogger(__name__)

_LEADING_MENTION = re.compile(r"^\s*<@[^>]+>\s*")


def strip_bot_mention(text: str, bot_name: str) -> str:
    """Drop the ``@statusbot`` / ``<@BOTID>`` prefix, keeping the text if there is none."""
    prefix = f"@{bot_name} "
    if text.startswith(prefix):
        return text[len(prefix):].strip()
    return _LEADING_MENTION.sub("", text, count=1).strip()


class StatusRecorder:
    def __init__(self, repo: StatusRepository, status_channel: Optional[str] = None):
        self.repo = repo
        self.status_channel = status_channel

    def accepts_channel(self, channel: Optional[str]) -> bool:
        return not self.status_channel or channel == self.status_channel

    def record(self, user: str, status: str) -> bool:
        """Overwrite the user's status. Returns False when nothing was stored."""
        user_id = normalize_user_id(user or "")
        status = (status or "").strip()
        if not user_id or not status:
            return False
        try:
            with self.repo.transaction() as repo:
                repo.upsert_user_status(user_id, status)
        except SQLAlchemyError as e:
            logger.error(f"Failed to record status for {user_id}: {e}", exc_info=True)
            return False
        logger.info(f"📝 Status updated for {user_id}")
        return True
