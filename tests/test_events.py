"""Tests for events.py and redis.py — Redis pub/sub publishing."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dto_dashboard.config import Settings
from dto_dashboard.events import CHANNEL, publish_pipeline_event
from dto_dashboard.models import PipelineEvent, PipelineStatus, StageStatus
from dto_dashboard.redis import get_async_redis


class TestPublishPipelineEvent:
    @pytest.mark.asyncio
    async def test_publishes_json_on_channel(self):
        redis = MagicMock()
        redis.publish = AsyncMock()
        redis.aclose = AsyncMock()
        event = PipelineEvent.status_changed(PipelineStatus(upload=StageStatus.running))

        with patch("dto_dashboard.events.get_async_redis", return_value=redis):
            await publish_pipeline_event(event)

        channel, payload = redis.publish.await_args.args
        assert channel == CHANNEL
        assert json.loads(payload) == {
            "type": "status",
            "status": {"upload": "running", "extraction": "idle", "persistence": "idle"},
        }
        redis.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, caplog):
        redis = MagicMock()
        redis.publish = AsyncMock(side_effect=ConnectionError("redis down"))
        redis.aclose = AsyncMock()

        with patch("dto_dashboard.events.get_async_redis", return_value=redis):
            await publish_pipeline_event(PipelineEvent.status_changed(PipelineStatus()))

        assert "Failed to publish pipeline event" in caplog.text
        redis.aclose.assert_awaited_once()


class TestGetAsyncRedis:
    def test_client_has_timeouts(self):
        settings = Settings(_env_file=None, redis_url="redis://cache:6379/1", redis_timeout_seconds=2.5)
        with patch("dto_dashboard.redis.get_settings", return_value=settings), \
                patch("dto_dashboard.redis.redis_from_url") as from_url:
            get_async_redis()

        from_url.assert_called_once_with(
            "redis://cache:6379/1",
            decode_responses=True,
            socket_connect_timeout=2.5,
            socket_timeout=2.5,
        )
