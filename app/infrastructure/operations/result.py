"""Operation result dataclass.

Outcome of classifying a failed provider call. Produced by the error
classifiers and consumed by the retry policy and circuit breaker.
"""

from dataclasses import dataclass
from typing import Optional

from infrastructure.operations.status import OperationStatus


@dataclass(frozen=True)
class OperationResult:
    """Classified failure of a provider call.

    Attributes:
        status: Failure category
        message: Log-friendly description of the failure
        error_code: Machine code such as ``HTTP_503`` or ``PROVIDER_20429``
        retry_after: Seconds the provider asked us to wait, if it said
    """

    status: OperationStatus
    message: str
    error_code: Optional[str] = None
    retry_after: Optional[float] = None

    @property
    def is_transient(self) -> bool:
        """True if the failure may succeed on a later attempt."""
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> "OperationResult":
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> "OperationResult":
        """Failure worth retrying: network errors, throttling, provider 5xx."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Failure a retry cannot fix: malformed request, rejected recipient,
        open circuit."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)
