"""
Rolling-window circuit breaker.

Opens when the failure ratio inside the window reaches the threshold
(once enough calls were seen), fails fast while open, then admits a
single probe after the cooldown. The probe's outcome closes or re-opens
the circuit.

Dependencies: threading (stdlib), ragcore.observability.metrics
System role: Failure containment for embedding and vector store calls
"""

import logging
import threading
import time
from collections import deque
from enum import Enum
from typing import Callable

from ragcore.core.exceptions import CircuitOpenError
from ragcore.observability.metrics import CIRCUIT_OPENED, FailureSignals, get_signals

logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """Failure-rate circuit breaker over a time window."""

    def __init__(
        self,
        name: str,
        failure_rate_threshold: float = 0.5,
        minimum_calls: int = 5,
        window_seconds: float = 30.0,
        cooldown_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        signals: FailureSignals | None = None,
    ) -> None:
        """
        Initialize breaker.

        Args:
            name: Protected dependency name (used in errors and logs)
            failure_rate_threshold: Failure ratio in (0, 1] that opens the circuit
            minimum_calls: Calls needed in the window before the ratio counts
            window_seconds: Rolling window length
            cooldown_seconds: Time spent open before a probe is admitted
            clock: Monotonic time source (injectable for tests)
            signals: Counter sink for circuit transitions
        """
        if not 0 < failure_rate_threshold <= 1:
            raise ValueError("failure_rate_threshold must be in (0, 1]")
        if minimum_calls < 1:
            raise ValueError("minimum_calls must be >= 1")

        self.name = name
        self._threshold = failure_rate_threshold
        self._minimum_calls = minimum_calls
        self._window = window_seconds
        self._cooldown = cooldown_seconds
        self._clock = clock
        self._signals = signals or get_signals()

        self._lock = threading.Lock()
        self._outcomes: deque[tuple[float, bool]] = deque()
        self._state = CircuitState.CLOSED
        self._opened_at = 0.0
        self._probe_in_flight = False

    @property
    def state(self) -> CircuitState:
        with self._lock:
            return self._current_state(self._clock())

    def before_call(self) -> None:
        """
        Admit or reject a call.

        Raises:
            CircuitOpenError: While open, or while the half-open probe is running
        """
        with self._lock:
            now = self._clock()
            state = self._current_state(now)
            if state == CircuitState.CLOSED:
                return
            if state == CircuitState.HALF_OPEN and not self._probe_in_flight:
                self._state = CircuitState.HALF_OPEN
                self._probe_in_flight = True
                logger.info(f"{__name__}:before_call - Half-open probe admitted for {self.name}")
                return
            retry_after = max(0.0, self._opened_at + self._cooldown - now)
        raise CircuitOpenError(self.name, retry_after)

    def record_success(self) -> None:
        with self._lock:
            now = self._clock()
            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                self._probe_in_flight = False
                self._outcomes.clear()
                logger.info(f"{__name__}:record_success - Circuit closed for {self.name}")
                return
            self._append(now, True)

    def record_failure(self) -> None:
        with self._lock:
            now = self._clock()
            if self._state == CircuitState.HALF_OPEN:
                self._open(now)
                return
            self._append(now, False)
            total = len(self._outcomes)
            failures = sum(1 for _, ok in self._outcomes if not ok)
            if total >= self._minimum_calls and failures / total >= self._threshold:
                self._open(now)

    def record_ignored(self) -> None:
        """Release a half-open probe whose outcome says nothing about provider health."""
        with self._lock:
            self._probe_in_flight = False

    def reset(self) -> None:
        with self._lock:
            self._state = CircuitState.CLOSED
            self._outcomes.clear()
            self._probe_in_flight = False

    def _current_state(self, now: float) -> CircuitState:
        if self._state == CircuitState.OPEN and now - self._opened_at >= self._cooldown:
            return CircuitState.HALF_OPEN
        return self._state

    def _append(self, now: float, ok: bool) -> None:
        self._outcomes.append((now, ok))
        cutoff = now - self._window
        while self._outcomes and self._outcomes[0][0] < cutoff:
            self._outcomes.popleft()

    def _open(self, now: float) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = now
        self._probe_in_flight = False
        self._outcomes.clear()
        self._signals.increment(CIRCUIT_OPENED)
        logger.warning(
            f"{__name__}:_open - Circuit opened for {self.name}",
            extra={"provider": self.name, "cooldown_seconds": self._cooldown},
        )
