"""Failure categories for provider calls."""

from enum import Enum


class OperationStatus(Enum):
    """How a failed provider call should be treated.

    Attributes:
        TRANSIENT_ERROR: Retryable (network, timeout, throttling, 5xx)
        PERMANENT_ERROR: Not retryable (malformed request, permanent 4xx,
            open circuit)
        UNAUTHORIZED: Provider rejected the credentials (401/403)
    """

    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
