"""Unit tests for FolioSmsClient."""

from urllib.parse import parse_qs

import httpx
import pytest

from infrastructure.configuration.integrations import FolioSettings
from infrastructure.notifications.models import SmsMessage
from integrations.errors import ProviderError
from integrations.folio import FolioSmsClient
from tests.factories.resilience import make_connect_error

MESSAGE = SmsMessage(phone_number="+15815551234", content="Welcome! Hello")


@pytest.fixture
def folio_settings():
    return FolioSettings(
        FOLIO_BASE_URL="https://folio.example.com/api/", FOLIO_API_KEY="folio-key"
    )


@pytest.fixture
def folio_factory(folio_settings, mock_http, policy_factory):
    def _factory(responses, **policy_kwargs):
        return FolioSmsClient(
            folio_settings,
            mock_http(responses),
            policy_factory(name="folio_sms", **policy_kwargs),
        )

    return _factory


@pytest.mark.unit
class TestFolioSmsClient:
    @pytest.mark.asyncio
    async def test_posts_form_with_api_key(self, folio_factory, requests_seen):
        await folio_factory([httpx.Response(200)]).send(MESSAGE)

        (request,) = requests_seen
        assert request.method == "POST"
        assert str(request.url) == "https://folio.example.com/api/send"
        assert request.headers["FOLIOMEDIAN_API_KEY"] == "folio-key"
        assert parse_qs(request.content.decode()) == {
            "to": ["+15815551234"],
            "message": ["Welcome! Hello"],
        }

    @pytest.mark.asyncio
    async def test_retries_server_errors(self, folio_factory, requests_seen, retry_sleep):
        client = folio_factory([httpx.Response(503), httpx.Response(200)])

        await client.send(MESSAGE)

        assert len(requests_seen) == 2
        assert [c.args[0] for c in retry_sleep.await_args_list] == [2.0]

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self, folio_factory, requests_seen):
        client = folio_factory([make_connect_error(), httpx.Response(200)])

        await client.send(MESSAGE)

        assert len(requests_seen) == 2

    @pytest.mark.asyncio
    async def test_rejected_request_is_not_retried(self, folio_factory, requests_seen):
        client = folio_factory([httpx.Response(400, text="bad number")])

        with pytest.raises(ProviderError) as exc_info:
            await client.send(MESSAGE)

        assert len(requests_seen) == 1
        assert exc_info.value.provider == "folio"
        assert exc_info.value.status_code == 400
        assert exc_info.value.response_body == "bad number"

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, folio_factory, requests_seen):
        client = folio_factory([httpx.Response(500)], max_retries=2)

        with pytest.raises(ProviderError):
            await client.send(MESSAGE)

        assert len(requests_seen) == 3

    @pytest.mark.asyncio
    async def test_rate_limit_uses_retry_after(
        self, folio_factory, retry_sleep
    ):
        client = folio_factory(
            [httpx.Response(429, headers={"Retry-After": "5"}), httpx.Response(200)]
        )

        await client.send(MESSAGE)

        assert [c.args[0] for c in retry_sleep.await_args_list] == [5.0]

    def test_requires_configuration(self, mock_http, policy_factory):
        with pytest.raises(ValueError, match="FOLIO_API_KEY"):
            FolioSmsClient(
                FolioSettings(FOLIO_BASE_URL="https://folio.example.com", FOLIO_API_KEY=None),
                mock_http([httpx.Response(200)]),
                policy_factory(),
            )
