"""Service singletons (initialized once) used across routers.

Keeps construction logic away from `main.py` so tests can swap them out.
"""
import logging
from app.config import get_settings
from app.infrastructure.slack_client import SlackWebClient

settings = get_settings()
logger = logging.getLogger(__name__)

slack_client = SlackWebClient(bot_token=settings.slack_bot_token or "")
logger.info(f"🤖 Services ready ({settings!r})")
