"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from fastapi import Request

from infrastructure.configuration import Settings
from infrastructure.notifications.service import NotificationService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/version")
        def get_version(settings: SettingsDep):
            return {"version": settings.GIT_SHA}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_notification_service(request: Request) -> NotificationService:
    """
    Get the NotificationService created by the application lifespan.

    The service owns the background consumer task, so it is created once per
    running application (see ``server.lifespan``) rather than cached here.

    Usage:
        @router.post("/notifications/sms")
        async def send_sms(service: NotificationServiceDep):
            await service.send(notification)

    Raises:
        RuntimeError: If the lifespan has not started the service
    """
    service = getattr(request.app.state, "notification_service", None)
    if service is None:
        raise RuntimeError("Notification service is not initialized")
    return service
