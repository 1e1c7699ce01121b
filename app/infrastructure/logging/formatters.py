"""Structlog processors used by configure_logging in production.

Usage:
    structlog.configure(
        processors=[
            add_app_info("notification-dispatcher", settings.GIT_SHA),
            mask_sensitive_data(),
            truncate_large_values(),
            structlog.processors.JSONRenderer(),
        ]
    )
"""

from typing import Any, Mapping

# Keys whose values are provider credentials
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "auth",
        "credential",
        "private_key",
        "cookie",
        "bearer",
        "account_sid",
    }
)


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that adds application name and version to log entries."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def _is_sensitive(key: str, patterns: frozenset[str]) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in patterns)


def _mask_mapping(
    values: Mapping[str, Any], patterns: frozenset[str], mask_value: str
) -> dict[str, Any]:
    masked = {}
    for key, value in values.items():
        if value is not None and _is_sensitive(str(key), patterns):
            masked[key] = mask_value
        elif isinstance(value, Mapping):
            masked[key] = _mask_mapping(value, patterns, mask_value)
        else:
            masked[key] = value
    return masked


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks sensitive data in log entries.

    Values of keys containing any sensitive pattern (case-insensitive) are
    replaced, including keys of nested mappings such as provider headers.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return _mask_mapping(event_dict, patterns, mask_value)

    return processor


def truncate_large_values(max_length: int = 2000):
    """Create a processor that truncates overly large string values.

    Notification snapshots and provider response bodies can be large;
    this keeps a single log line bounded.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
