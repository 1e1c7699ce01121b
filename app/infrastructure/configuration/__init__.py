"""Infrastructure configuration module - public API.

Centralized configuration for the notification dispatcher using Pydantic
BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    ResilienceSettings: Provider retry/circuit breaker settings
    QueueSettings: Fire-and-forget queue settings

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    folio_url = settings.folio.base_url
    retries = settings.resilience.max_retries

    if settings.is_production:
        ...
    ```
"""

from infrastructure.configuration.infrastructure import (
    QueueSettings,
    ResilienceSettings,
)
from infrastructure.configuration.settings import Settings

__all__ = ["Settings", "ResilienceSettings", "QueueSettings"]
