"""Operation result types and status enums.

This module contains the standardized result type for provider calls,
the status enum, and the classifier that maps provider exceptions to
transient or permanent outcomes.
"""

from infrastructure.operations.classifiers import (
    RETRYABLE_STATUS_CODES,
    classify_provider_error,
    is_transient_failure,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "RETRYABLE_STATUS_CODES",
    "classify_provider_error",
    "is_transient_failure",
]
