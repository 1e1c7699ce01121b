"""Infrastructure modules for the notification dispatcher.

Centralized infrastructure components:
- configuration: Settings management (Settings, ResilienceSettings, QueueSettings)
- logging: Structured logging setup and request context binding
- notifications: Validation, rendering, channels, dispatcher and fire-and-forget queue
- operations: Operation results and provider error classification
- resilience: Circuit breakers and retry policy
- services: Dependency injection providers (get_settings, SettingsDep, NotificationServiceDep)

Subpackages are imported explicitly, e.g.
``from infrastructure.notifications import NotificationService``.
"""
