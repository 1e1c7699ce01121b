from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

import httpx
from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.notifications import NotificationService
from infrastructure.services import get_settings
from modules import welcome

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _build_notification_service(
    settings: "Settings", http_client: httpx.AsyncClient
) -> NotificationService:
    default_language = settings.default_locale.split("-")[0]
    return NotificationService.from_settings(
        settings,
        http_client=http_client,
        renderers=[welcome.build_renderer(default_language=default_language)],
        schemas=welcome.WELCOME_SCHEMAS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    http_client = httpx.AsyncClient(timeout=settings.resilience.timeout_seconds)
    try:
        service = _build_notification_service(settings, http_client)
    except ValueError as exc:
        logger.error("notification_service_configuration_failed", error=str(exc))
        await http_client.aclose()
        raise

    if settings.queue.enabled:
        service.start()
    else:
        # No consumer, so fire-and-forget requests are refused
        service.queue.close()
        logger.info("notification_consumer_disabled")

    app.state.notification_service = service

    yield

    logger.info("application_shutdown")

    try:
        await service.stop()
    finally:
        await http_client.aclose()
        logger.info("http_client_closed")
