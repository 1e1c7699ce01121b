"""Welcome notification endpoints."""

from typing import NoReturn, Optional

import httpx
from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    LOCALE_PATTERN,
    EmailAddress,
    NoChannelRegisteredError,
    NoRendererRegisteredError,
    Notification,
    NotificationValidationError,
    PhoneNumber,
)
from infrastructure.resilience import CircuitBreakerOpenError
from infrastructure.services import NotificationServiceDep, SettingsDep
from integrations.errors import ProviderError
from modules.welcome import WelcomeEmailNotification, WelcomeSmsNotification

logger = get_module_logger()
router = APIRouter(prefix="/notifications", tags=["Notifications"])


class SmsRequest(BaseModel):
    phone_number: str = Field(description="E.164 number, e.g. +15815551234")
    message: str = "Welcome!"
    language: Optional[str] = Field(default=None, pattern=LOCALE_PATTERN)
    fire_and_forget: bool = False


class EmailRequest(BaseModel):
    to: str
    subject: str
    language: Optional[str] = Field(default=None, pattern=LOCALE_PATTERN)
    fire_and_forget: bool = False


def _invalid(field: str, error: ValueError) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=[{"field": field, "message": str(error)}],
    )


async def _dispatch(
    service: NotificationServiceDep,
    notification: Notification,
    fire_and_forget: bool,
    response: Response,
) -> dict:
    if fire_and_forget:
        if not service.accepting_queued:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Fire-and-forget delivery is disabled",
            )
        service.send_nowait(notification)
        response.status_code = status.HTTP_202_ACCEPTED
        return {"status": "queued"}

    try:
        await service.send(notification)
    except NotificationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.to_dict()
        ) from e
    except (ProviderError, CircuitBreakerOpenError, httpx.HTTPError) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Notification provider failed: {e}",
        ) from e
    except (NoChannelRegisteredError, NoRendererRegisteredError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        ) from e

    return {"status": "sent"}


@router.post("/sms")
async def send_welcome_sms(
    body: SmsRequest,
    response: Response,
    service: NotificationServiceDep,
    settings: SettingsDep,
):
    """Send a welcome SMS, or queue it when ``fire_and_forget`` is set."""
    try:
        phone_number = PhoneNumber.parse(body.phone_number)
    except ValueError as e:
        _invalid("phone_number", e)

    notification = WelcomeSmsNotification(
        locale=body.language or settings.default_locale,
        phone_number=phone_number,
        message=body.message,
    )
    logger.info("welcome_sms_requested", fire_and_forget=body.fire_and_forget)
    return await _dispatch(service, notification, body.fire_and_forget, response)


@router.post("/email")
async def send_welcome_email(
    body: EmailRequest,
    response: Response,
    service: NotificationServiceDep,
    settings: SettingsDep,
):
    """Send a welcome email, or queue it when ``fire_and_forget`` is set."""
    try:
        to = EmailAddress(body.to)
    except ValueError as e:
        _invalid("to", e)

    notification = WelcomeEmailNotification(
        locale=body.language or settings.default_locale,
        to=to,
        subject=body.subject,
    )
    logger.info("welcome_email_requested", fire_and_forget=body.fire_and_forget)
    return await _dispatch(service, notification, body.fire_and_forget, response)
