"""Fire-and-forget notification queue settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class QueueSettings(InfrastructureSettings):
    """Background consumer configuration.

    Environment Variables:
        NOTIFICATION_QUEUE_ENABLED: Start the background consumer (default: True)
        NOTIFICATION_QUEUE_SHUTDOWN_TIMEOUT_SECONDS: How long shutdown waits for
            the consumer before cancelling it (default: 10.0)
        NOTIFICATION_QUEUE_DRAIN_ON_SHUTDOWN: Deliver everything still queued
            before stopping (default: False)

    The queue is in memory only; queued notifications do not survive a restart.
    """

    enabled: bool = Field(default=True, alias="NOTIFICATION_QUEUE_ENABLED")
    shutdown_timeout_seconds: float = Field(
        default=10.0, gt=0, alias="NOTIFICATION_QUEUE_SHUTDOWN_TIMEOUT_SECONDS"
    )
    drain_on_shutdown: bool = Field(
        default=False, alias="NOTIFICATION_QUEUE_DRAIN_ON_SHUTDOWN"
    )
