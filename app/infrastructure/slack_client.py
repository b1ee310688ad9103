import logging

import requests

logger = logging.getLogger(__name__)


class SlackWebClient:
    """Minimal Slack Web API client (reactions only)."""

    def __init__(self, bot_token: str, base_url: str = "https://slack.com/api"):
        self.bot_token = bot_token
        self.base_url = base_url
        logger.info(f"🔧 SlackWebClient initialized (token: {'set' if bot_token else 'NOT_SET'})")

    async def add_reaction(self, channel: str, timestamp: str, name: str = "thumbsup") -> bool:
        """React to a message to acknowledge it was received."""
        if not self.bot_token:
            logger.error("❌ Slack reaction skipped: SLACK_BOT_TOKEN not configured")
            return False

        headers = {
            "Authorization": f"Bearer {self.bot_token}",
            "Content-Type": "application/json; charset=utf-8",
        }
        payload = {"channel": channel, "name": name, "timestamp": timestamp}

        try:
            response = requests.post(f"{self.base_url}/reactions.add", headers=headers, json=payload, timeout=10)
        except requests.exceptions.Timeout as e:
            logger.error(f"❌ Slack reaction timeout: {str(e)}")
            return False
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Slack reaction request failed: {str(e)}")
            return False

        if response.status_code >= 400:
            logger.error(f"❌ Slack reaction failed with status {response.status_code}")
            return False

        try:
            body = response.json()
        except ValueError:
            logger.error("❌ Slack reaction returned a non-JSON body")
            return False

        if not body.get("ok"):
            logger.error(f"❌ Slack reaction rejected: {body.get('error')}")
            return False
        return True
