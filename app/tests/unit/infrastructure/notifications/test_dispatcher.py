"""Unit tests for NotificationSender.

Tests cover:
- First-match channel and renderer selection
- Validation before rendering and sending
- Routing errors
- Error propagation and logging
"""

import pytest
from unittest.mock import patch

from infrastructure.notifications.exceptions import (
    NoChannelRegisteredError,
    NoRendererRegisteredError,
    NotificationValidationError,
    ValidationFailure,
)
from infrastructure.notifications.models import NotificationKind
from tests.factories.notifications import (
    RecordingChannel,
    StaticRenderer,
    StubValidator,
    make_welcome_email,
    make_welcome_sms,
)
from tests.factories.resilience import make_provider_error


@pytest.mark.unit
class TestNotificationSenderSend:
    @pytest.mark.asyncio
    async def test_sends_rendered_content_through_matching_channel(
        self, sender_factory, sms_channel, email_channel
    ):
        notification = make_welcome_sms()

        await sender_factory().send(notification)

        assert sms_channel.sent == [(notification, "Welcome! Hello")]
        assert email_channel.sent == []

    @pytest.mark.asyncio
    async def test_email_goes_to_email_channel(
        self, sender_factory, sms_channel, email_channel
    ):
        notification = make_welcome_email()

        await sender_factory().send(notification)

        assert email_channel.sent == [(notification, "Welcome! Hello")]
        assert sms_channel.sent == []

    @pytest.mark.asyncio
    async def test_validates_before_rendering(self, sender_factory, validator, renderer):
        notification = make_welcome_sms()

        await sender_factory().send(notification)

        assert validator.validated == [notification]
        assert renderer.rendered == [notification]


@pytest.mark.unit
class TestNotificationSenderSelection:
    @pytest.mark.asyncio
    async def test_no_channels_fails_before_validation_and_rendering(
        self, sender_factory, validator, renderer
    ):
        sender = sender_factory(channels=[])

        with pytest.raises(NoChannelRegisteredError) as exc_info:
            await sender.send(make_welcome_sms())

        assert exc_info.value.notification_type == "WelcomeSmsNotification"
        assert validator.validated == []
        assert renderer.rendered == []

    @pytest.mark.asyncio
    async def test_no_matching_channel(self, sender_factory, sms_channel):
        sender = sender_factory(channels=[sms_channel])

        with pytest.raises(NoChannelRegisteredError):
            await sender.send(make_welcome_email())

    @pytest.mark.asyncio
    async def test_first_registered_channel_wins(self, sender_factory):
        first = RecordingChannel(kind=NotificationKind.SMS, name="first")
        second = RecordingChannel(kind=NotificationKind.SMS, name="second")
        sender = sender_factory(channels=[first, second])

        await sender.send(make_welcome_sms())

        assert len(first.sent) == 1
        assert second.sent == []

    @pytest.mark.asyncio
    async def test_first_registered_renderer_wins(self, sender_factory, sms_channel):
        skipped = StaticRenderer("never", renders=False)
        first = StaticRenderer("first")
        second = StaticRenderer("second")
        sender = sender_factory(renderers=[skipped, first, second])

        await sender.send(make_welcome_sms())

        assert sms_channel.sent[0][1] == "first"
        assert skipped.rendered == []
        assert second.rendered == []

    @pytest.mark.asyncio
    async def test_no_renderer(self, sender_factory, sms_channel):
        sender = sender_factory(renderers=[StaticRenderer(renders=False)])

        with pytest.raises(NoRendererRegisteredError):
            await sender.send(make_welcome_sms())

        assert sms_channel.sent == []


@pytest.mark.unit
class TestNotificationSenderFailures:
    @pytest.mark.asyncio
    async def test_validation_failure_short_circuits(
        self, sender_factory, sms_channel, renderer
    ):
        failing = StubValidator([ValidationFailure("message", "Message is required")])
        sender = sender_factory(validator_override=failing)

        with pytest.raises(NotificationValidationError) as exc_info:
            await sender.send(make_welcome_sms(message=""))

        assert exc_info.value.errors == [
            ValidationFailure("message", "Message is required")
        ]
        assert renderer.rendered == []
        assert sms_channel.sent == []

    @pytest.mark.asyncio
    async def test_provider_failure_is_logged_and_reraised(self, sender_factory):
        error = make_provider_error(status_code=500)
        channel = RecordingChannel(kind=NotificationKind.SMS, name="sms", error=error)
        sender = sender_factory(channels=[channel])

        with patch("infrastructure.notifications.dispatcher.logger") as mock_logger:
            with pytest.raises(type(error)):
                await sender.send(make_welcome_sms())

        mock_logger.error.assert_called_once()
        args, kwargs = mock_logger.error.call_args
        assert args[0] == "notification_send_failed"
        assert kwargs["channel"] == "sms"
        assert '"phone_number"' in kwargs["notification"]
        mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_is_logged_with_snapshot(self, sender_factory):
        sender = sender_factory()

        with patch("infrastructure.notifications.dispatcher.logger") as mock_logger:
            await sender.send(make_welcome_sms(message="Hello"))

        args, kwargs = mock_logger.info.call_args
        assert args[0] == "notification_sent"
        assert '"message": "Hello"' in kwargs["notification"]
