"""Fixtures for route tests.

Routes are mounted on a bare FastAPI app without the lifespan; the
notification service on ``app.state`` is a mock.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from infrastructure.services import get_settings


@pytest.fixture
def notification_service():
    service = MagicMock()
    service.send = AsyncMock()
    service.health_check.return_value = {"status": "ok", "queue_depth": 0}
    return service


@pytest.fixture
def app(settings_factory, notification_service):
    app = FastAPI()
    setup_rate_limiter(app)
    app.include_router(api_router)
    app.state.notification_service = notification_service
    app.dependency_overrides[get_settings] = lambda: settings_factory()
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
