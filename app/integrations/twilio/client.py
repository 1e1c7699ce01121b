"""Twilio Programmable Messaging client."""

import httpx
import structlog
from infrastructure.configuration.integrations.twilio import TwilioSettings
from infrastructure.notifications.models import SmsMessage
from infrastructure.resilience import ResiliencePolicy
from integrations.errors import ProviderError, parse_retry_after
from integrations.http import MAX_ERROR_BODY_LENGTH, HttpProviderClient, phone_suffix

logger = structlog.get_logger()


class TwilioSmsClient(HttpProviderClient):
    """Sends SMS through the Twilio Messages resource.

    Error responses carry a Twilio ``code`` (e.g. 20429 too many requests)
    which is kept on the ProviderError for classification.

    Raises:
        ValueError: On construction, if the account SID, auth token or
            sender number is unset
    """

    provider_name = "twilio"

    def __init__(
        self,
        settings: TwilioSettings,
        http_client: httpx.AsyncClient,
        policy: ResiliencePolicy,
        timeout_seconds: float = 10.0,
    ):
        settings.validate_configured()
        super().__init__(http_client, policy, timeout_seconds)
        self._messages_url = (
            f"{settings.api_url.rstrip('/')}/2010-04-01/Accounts/"
            f"{settings.account_sid}/Messages.json"
        )
        self._auth = httpx.BasicAuth(settings.account_sid, settings.auth_token)
        self._number_from = settings.number_from
        logger.info("initialized_twilio_client", number_from=self._number_from)

    def error_from_response(self, response: httpx.Response) -> ProviderError:
        error_code = None
        message = f"twilio returned HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if body.get("code") is not None:
                error_code = str(body["code"])
            if body.get("message"):
                message = f"{message}: {body['message']}"

        return ProviderError(
            self.provider_name,
            message,
            status_code=response.status_code,
            error_code=error_code,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
            response_body=response.text[:MAX_ERROR_BODY_LENGTH],
        )

    async def send(self, message: SmsMessage) -> None:
        response = await self.post(
            self._messages_url,
            log_context={"to_suffix": phone_suffix(message.phone_number)},
            data={
                "To": message.phone_number,
                "From": self._number_from,
                "Body": message.content,
            },
            auth=self._auth,
        )
        try:
            message_sid = response.json().get("sid")
        except ValueError:
            message_sid = None
        logger.debug("twilio_message_created", message_sid=message_sid)
