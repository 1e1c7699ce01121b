"""Provider client contracts the notification channels depend on."""

from typing import Protocol, runtime_checkable

from infrastructure.notifications.models import EmailMessage, SmsMessage


@runtime_checkable
class SmsClient(Protocol):
    """Sends one SMS. Failures raise ProviderError or an httpx error."""

    provider_name: str

    async def send(self, message: SmsMessage) -> None: ...


@runtime_checkable
class EmailClient(Protocol):
    """Sends one email. Failures raise ProviderError or an httpx error."""

    provider_name: str

    async def send(self, message: EmailMessage) -> None: ...
