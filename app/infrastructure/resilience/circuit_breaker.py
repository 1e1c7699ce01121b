"""Circuit breaker implementation for provider resilience.

The circuit breaker pattern prevents hammering a degraded provider:
1. CLOSED state: Normal operation, calls pass through
2. OPEN state: Fast-fail calls without contacting the provider
3. HALF_OPEN state: Let a limited number of trial calls through

State transitions:
- CLOSED -> OPEN: After failure_threshold consecutive counted failures
- OPEN -> HALF_OPEN: After timeout period expires
- HALF_OPEN -> CLOSED: After a successful trial call
- HALF_OPEN -> OPEN: If a trial call fails

Only failures accepted by ``failure_predicate`` are counted. With the
default predicate every exception counts; provider wrappers pass
``is_transient_failure`` so a malformed request never opens the circuit.
"""

import threading
from enum import Enum
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

import structlog

logger = structlog.get_logger()


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpenError(Exception):
    """Raised when circuit breaker is open and the call is rejected."""

    is_circuit_open = True

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


def _count_every_failure(exc: BaseException) -> bool:
    return True


class CircuitBreaker:
    """Circuit breaker for async provider calls.

    The lock only guards state bookkeeping and is never held across an
    ``await``, so one breaker can be shared by coroutines on the event loop
    and by callers on other threads.

    Args:
        name: Name of the circuit (typically provider name)
        failure_threshold: Number of consecutive counted failures before opening
        timeout_seconds: Seconds to wait before attempting recovery (HALF_OPEN)
        half_open_max_calls: Max trial calls to allow in HALF_OPEN state
        failure_predicate: Decides whether an exception counts as a failure
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        timeout_seconds: float = 30,
        half_open_max_calls: int = 1,
        failure_predicate: Optional[Callable[[BaseException], bool]] = None,
    ):
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        if half_open_max_calls < 1:
            raise ValueError("half_open_max_calls must be at least 1")

        self.name = name
        self.failure_threshold = failure_threshold
        self.timeout_seconds = timeout_seconds
        self.half_open_max_calls = half_open_max_calls
        self.failure_predicate = failure_predicate or _count_every_failure

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time: Optional[datetime] = None
        self._half_open_calls = 0

        self._lock = threading.Lock()

    @property
    def state(self) -> CircuitState:
        """Get current circuit state."""
        with self._lock:
            return self._state

    async def call(
        self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> Any:
        """Await ``func`` through the circuit breaker.

        Args:
            func: Coroutine function to call
            *args, **kwargs: Arguments to pass to func

        Returns:
            Result from func

        Raises:
            CircuitBreakerOpenError: If circuit is open
            Exception: Any exception raised by func
        """
        self._before_call()

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            self._on_failure(e)
            raise
        except BaseException:
            # Cancellation is neither a success nor a failure of the provider
            self._release_half_open_slot()
            raise
        else:
            self._on_success()
            return result

    def _before_call(self) -> None:
        with self._lock:
            if self._state == CircuitState.OPEN:
                if self._should_attempt_reset():
                    self._transition_to_half_open()
                else:
                    remaining = self._remaining_open_seconds()
                    logger.warning(
                        "circuit_breaker_open",
                        name=self.name,
                        failure_count=self._failure_count,
                        retry_in_seconds=int(remaining),
                    )
                    raise CircuitBreakerOpenError(
                        self.name,
                        f"Circuit breaker '{self.name}' is OPEN. "
                        f"Retry in {int(remaining)} seconds.",
                    )

            if self._state == CircuitState.HALF_OPEN:
                if self._half_open_calls >= self.half_open_max_calls:
                    logger.debug(
                        "circuit_breaker_half_open_limit",
                        name=self.name,
                        calls=self._half_open_calls,
                    )
                    raise CircuitBreakerOpenError(
                        self.name,
                        f"Circuit breaker '{self.name}' is HALF_OPEN "
                        f"(max trial calls reached).",
                    )
                self._half_open_calls += 1

    def _release_half_open_slot(self) -> None:
        with self._lock:
            if self._state == CircuitState.HALF_OPEN and self._half_open_calls > 0:
                self._half_open_calls -= 1

    def _on_success(self) -> None:
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._success_count += 1
                logger.info(
                    "circuit_breaker_success_half_open",
                    name=self.name,
                    success_count=self._success_count,
                )
                self._transition_to_closed()
            elif self._state == CircuitState.CLOSED and self._failure_count > 0:
                logger.debug(
                    "circuit_breaker_failure_count_reset",
                    name=self.name,
                    previous_failures=self._failure_count,
                )
                self._failure_count = 0

    def _on_failure(self, exception: Exception) -> None:
        if not self.failure_predicate(exception):
            # Permanent failures say nothing about provider health
            self._release_half_open_slot()
            return

        with self._lock:
            self._failure_count += 1
            self._last_failure_time = datetime.now(timezone.utc)

            if self._state == CircuitState.HALF_OPEN:
                logger.warning(
                    "circuit_breaker_recovery_failed",
                    name=self.name,
                    error=str(exception),
                )
                self._transition_to_open()
            elif self._state == CircuitState.CLOSED:
                if self._failure_count >= self.failure_threshold:
                    logger.error(
                        "circuit_breaker_threshold_exceeded",
                        name=self.name,
                        failure_count=self._failure_count,
                        threshold=self.failure_threshold,
                        error=str(exception),
                    )
                    self._transition_to_open()
                else:
                    logger.warning(
                        "circuit_breaker_failure",
                        name=self.name,
                        failure_count=self._failure_count,
                        threshold=self.failure_threshold,
                        error=str(exception),
                    )

    def _should_attempt_reset(self) -> bool:
        if self._last_failure_time is None:
            return True
        elapsed = datetime.now(timezone.utc) - self._last_failure_time
        return elapsed >= timedelta(seconds=self.timeout_seconds)

    def _remaining_open_seconds(self) -> float:
        if self._last_failure_time is None:
            return 0.0
        elapsed = (datetime.now(timezone.utc) - self._last_failure_time).total_seconds()
        return max(self.timeout_seconds - elapsed, 0.0)

    def _transition_to_closed(self) -> None:
        logger.info("circuit_breaker_closed", name=self.name)
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._half_open_calls = 0

    def _transition_to_open(self) -> None:
        logger.error(
            "circuit_breaker_opened",
            name=self.name,
            timeout_seconds=self.timeout_seconds,
        )
        self._state = CircuitState.OPEN
        self._half_open_calls = 0

    def _transition_to_half_open(self) -> None:
        logger.info("circuit_breaker_half_open", name=self.name)
        self._state = CircuitState.HALF_OPEN
        self._failure_count = 0
        self._success_count = 0
        self._half_open_calls = 0

    def get_stats(self) -> dict:
        """Get circuit breaker statistics."""
        with self._lock:
            return {
                "name": self.name,
                "state": self._state.value,
                "failure_count": self._failure_count,
                "success_count": self._success_count,
                "last_failure_time": (
                    self._last_failure_time.isoformat()
                    if self._last_failure_time
                    else None
                ),
                "half_open_calls": self._half_open_calls,
            }

    def reset(self) -> None:
        """Manually reset circuit breaker (for testing/admin operations)."""
        with self._lock:
            logger.info("circuit_breaker_manual_reset", name=self.name)
            self._transition_to_closed()


# Global registry for monitoring
_circuit_breaker_registry: Dict[str, CircuitBreaker] = {}


def register_circuit_breaker(cb: CircuitBreaker) -> None:
    """Register a circuit breaker for monitoring."""
    _circuit_breaker_registry[cb.name] = cb


def get_all_circuit_breaker_stats() -> dict:
    """Get statistics for all circuit breakers."""
    return {name: cb.get_stats() for name, cb in _circuit_breaker_registry.items()}


def get_open_circuit_breakers() -> list:
    """Get list of circuit breakers that are currently OPEN."""
    return [
        name
        for name, cb in _circuit_breaker_registry.items()
        if cb.state == CircuitState.OPEN
    ]


def get_circuit_breaker(name: str) -> Optional[CircuitBreaker]:
    """Get a circuit breaker by name."""
    return _circuit_breaker_registry.get(name)


def clear_circuit_breaker_registry() -> None:
    """Forget every registered circuit breaker."""
    _circuit_breaker_registry.clear()
