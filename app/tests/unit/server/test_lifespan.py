"""Unit tests for the application lifespan."""

import pytest
from fastapi import FastAPI
from unittest.mock import AsyncMock, patch

from infrastructure.configuration.infrastructure import QueueSettings
from infrastructure.notifications import NotificationService
from server.lifespan import lifespan


@pytest.mark.unit
class TestLifespan:
    @pytest.mark.asyncio
    async def test_starts_consumer_and_stops_it(self, settings_factory):
        app = FastAPI()

        with patch("server.lifespan.get_settings", return_value=settings_factory()):
            async with lifespan(app):
                service = app.state.notification_service
                assert service.accepting_queued is True

        assert service.background.running is False

    @pytest.mark.asyncio
    async def test_disabled_queue_refuses_fire_and_forget(self, settings_factory):
        settings = settings_factory(
            queue=QueueSettings(NOTIFICATION_QUEUE_ENABLED=False)
        )
        app = FastAPI()

        with patch("server.lifespan.get_settings", return_value=settings):
            async with lifespan(app):
                service = app.state.notification_service
                assert service.queue.closed is True
                assert service.accepting_queued is False

    @pytest.mark.asyncio
    async def test_http_client_closed_when_service_stop_fails(self, settings_factory):
        settings = settings_factory(
            queue=QueueSettings(NOTIFICATION_QUEUE_ENABLED=False)
        )
        app = FastAPI()

        with patch("server.lifespan.get_settings", return_value=settings), patch.object(
            NotificationService, "stop", AsyncMock(side_effect=RuntimeError("stuck"))
        ), patch(
            "server.lifespan.httpx.AsyncClient"
        ) as client_cls:
            client_cls.return_value.aclose = AsyncMock()

            with pytest.raises(RuntimeError):
                async with lifespan(app):
                    pass

        client_cls.return_value.aclose.assert_awaited_once()
