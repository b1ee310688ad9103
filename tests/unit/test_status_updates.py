"""
Unit tests for passive status recording and the Slack Web API client.
"""
import pytest
from unittest.mock import MagicMock, patch

import requests

from app.application.status_updates import StatusRecorder, strip_bot_mention
from app.infrastructure.slack_client import SlackWebClient


class TestStripBotMention:
    def test_named_prefix(self):
        assert strip_bot_mention("@statusbot telework", "statusbot") == "telework"

    def test_slack_mention_prefix(self):
        assert strip_bot_mention("<@U0BOT> in the office", "statusbot") == "in the office"

    def test_no_prefix_keeps_text(self):
        assert strip_bot_mention("on leave", "statusbot") == "on leave"


class TestStatusRecorder:
    def test_record_overwrites(self, repo):
        recorder = StatusRecorder(repo)
        assert recorder.record("<@U1>", "office")
        assert recorder.record("U1", "telework")
        assert repo.get_user("U1").status == "telework"

    def test_blank_status_ignored(self, repo):
        assert StatusRecorder(repo).record("U1", "   ") is False
        assert repo.get_user("U1") is None

    def test_channel_filter(self, repo):
        recorder = StatusRecorder(repo, status_channel="C0STATUS")
        assert recorder.accepts_channel("C0STATUS")
        assert not recorder.accepts_channel("C0RANDOM")

    def test_no_channel_filter(self, repo):
        assert StatusRecorder(repo).accepts_channel("C0RANDOM")


class TestSlackWebClient:
    @pytest.mark.asyncio
    async def test_add_reaction_success(self):
        client = SlackWebClient(bot_token="xoxb-test")
        response = MagicMock(status_code=200)
        response.json.return_value = {"ok": True}

        with patch("app.infrastructure.slack_client.requests.post", return_value=response) as post:
            assert await client.add_reaction("C1", "123.456") is True

        url = post.call_args.args[0]
        assert url.endswith("/reactions.add")
        assert post.call_args.kwargs["json"] == {"channel": "C1", "name": "thumbsup", "timestamp": "123.456"}
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer xoxb-test"

    @pytest.mark.asyncio
    async def test_add_reaction_api_error(self):
        client = SlackWebClient(bot_token="xoxb-test")
        response = MagicMock(status_code=200)
        response.json.return_value = {"ok": False, "error": "already_reacted"}

        with patch("app.infrastructure.slack_client.requests.post", return_value=response):
            assert await client.add_reaction("C1", "123.456") is False

    @pytest.mark.asyncio
    async def test_add_reaction_timeout(self):
        client = SlackWebClient(bot_token="xoxb-test")
        with patch("app.infrastructure.slack_client.requests.post", side_effect=requests.exceptions.Timeout("slow")):
            assert await client.add_reaction("C1", "123.456") is False

    @pytest.mark.asyncio
    async def test_missing_token_skips_call(self):
        client = SlackWebClient(bot_token="")
        with patch("app.infrastructure.slack_client.requests.post") as post:
            assert await client.add_reaction("C1", "123.456") is False
        post.assert_not_called()
