"""Test fixtures for notification infrastructure tests."""

import pytest

from infrastructure.notifications.dispatcher import NotificationSender
from infrastructure.notifications.models import NotificationKind
from tests.factories.notifications import (
    RecordingChannel,
    StaticRenderer,
    StubValidator,
)


@pytest.fixture
def sms_channel():
    return RecordingChannel(kind=NotificationKind.SMS, name="sms")


@pytest.fixture
def email_channel():
    return RecordingChannel(kind=NotificationKind.EMAIL, name="email")


@pytest.fixture
def renderer():
    return StaticRenderer("Welcome! Hello")


@pytest.fixture
def validator():
    return StubValidator()


@pytest.fixture
def sender_factory(sms_channel, email_channel, renderer, validator):
    """Factory for NotificationSender with recording collaborators.

    Example:
        sender = sender_factory(channels=[])
        sender = sender_factory(validator=StubValidator([failure]))
    """

    def _factory(channels=None, renderers=None, validator_override=None):
        return NotificationSender(
            channels=[sms_channel, email_channel] if channels is None else channels,
            renderers=[renderer] if renderers is None else renderers,
            validator=validator_override or validator,
        )

    return _factory
