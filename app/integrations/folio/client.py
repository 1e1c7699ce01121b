"""Folio SMS gateway client."""

import httpx
import structlog
from infrastructure.configuration.integrations.folio import FolioSettings
from infrastructure.notifications.models import SmsMessage
from infrastructure.resilience import ResiliencePolicy
from integrations.http import HttpProviderClient, phone_suffix

logger = structlog.get_logger()

API_KEY_HEADER = "FOLIOMEDIAN_API_KEY"


class FolioSmsClient(HttpProviderClient):
    """Sends SMS through Folio.

    Posts a form with ``to`` and ``message`` to ``{FOLIO_BASE_URL}/send``,
    authenticated with the ``FOLIOMEDIAN_API_KEY`` header.

    Raises:
        ValueError: On construction, if FOLIO_BASE_URL or FOLIO_API_KEY is unset
    """

    provider_name = "folio"

    def __init__(
        self,
        settings: FolioSettings,
        http_client: httpx.AsyncClient,
        policy: ResiliencePolicy,
        timeout_seconds: float = 10.0,
    ):
        settings.validate_configured()
        super().__init__(http_client, policy, timeout_seconds)
        self._send_url = f"{settings.base_url.rstrip('/')}/send"
        self._api_key = settings.api_key
        logger.info("initialized_folio_client", url=self._send_url)

    async def send(self, message: SmsMessage) -> None:
        await self.post(
            self._send_url,
            log_context={"to_suffix": phone_suffix(message.phone_number)},
            data={"to": message.phone_number, "message": message.content},
            headers={API_KEY_HEADER: self._api_key},
        )
