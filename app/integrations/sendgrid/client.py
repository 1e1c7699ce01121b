"""SendGrid v3 Mail Send client."""

from typing import Any, Dict

import httpx
import structlog
from infrastructure.configuration.integrations.sendgrid import SendGridSettings
from infrastructure.notifications.models import EmailMessage
from infrastructure.resilience import ResiliencePolicy
from integrations.errors import ProviderError, parse_retry_after
from integrations.http import MAX_ERROR_BODY_LENGTH, HttpProviderClient

logger = structlog.get_logger()


class SendGridEmailClient(HttpProviderClient):
    """Sends HTML email through SendGrid.

    Raises:
        ValueError: On construction, if the API key, sender address or
            sender name is unset
    """

    provider_name = "sendgrid"

    def __init__(
        self,
        settings: SendGridSettings,
        http_client: httpx.AsyncClient,
        policy: ResiliencePolicy,
        timeout_seconds: float = 10.0,
    ):
        settings.validate_configured()
        super().__init__(http_client, policy, timeout_seconds)
        self._send_url = f"{settings.api_url.rstrip('/')}/v3/mail/send"
        self._api_key = settings.api_key
        self._sender: Dict[str, str] = {"email": settings.from_email}
        if settings.from_name:
            self._sender["name"] = settings.from_name
        logger.info("initialized_sendgrid_client", from_email=settings.from_email)

    def build_payload(self, message: EmailMessage) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": self._sender,
            "subject": message.subject,
            "content": [{"type": "text/html", "value": message.content}],
        }

    def error_from_response(self, response: httpx.Response) -> ProviderError:
        message = f"sendgrid returned HTTP {response.status_code}"
        try:
            errors = response.json().get("errors") or []
        except (ValueError, AttributeError):
            errors = []
        details = [e.get("message") for e in errors if isinstance(e, dict) and e.get("message")]
        if details:
            message = f"{message}: {'; '.join(details)}"

        return ProviderError(
            self.provider_name,
            message,
            status_code=response.status_code,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
            response_body=response.text[:MAX_ERROR_BODY_LENGTH],
        )

    async def send(self, message: EmailMessage) -> None:
        await self.post(
            self._send_url,
            log_context={"to_domain": message.to.rsplit("@", 1)[-1]},
            json=self.build_payload(message),
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
