"""Errors raised by outbound provider clients.

Every provider client (Folio, Twilio, SendGrid) reports a failed call with
``ProviderError``. Network-level failures surface as the underlying
``httpx`` exceptions and are classified alongside these.
"""

from typing import Optional


class ProviderError(Exception):
    """Raised when a provider rejects or fails a request.

    Attributes:
        provider: Provider name ("folio", "twilio", "sendgrid")
        status_code: HTTP status returned by the provider, if any
        error_code: Provider-specific error code (e.g. Twilio's ``20429``)
        retry_after: Seconds the provider asked us to wait, if supplied
        response_body: Raw response body for troubleshooting
    """

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        retry_after: Optional[float] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code
        self.retry_after = retry_after
        self.response_body = response_body

    def __repr__(self) -> str:
        return (
            f"ProviderError(provider={self.provider!r}, "
            f"status_code={self.status_code!r}, error_code={self.error_code!r})"
        )


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a ``Retry-After`` header expressed in seconds.

    HTTP-date values and malformed headers are ignored.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds >= 0 else None
