"""
Resilience policy for provider calls.

Wraps an async call with a per-attempt timeout, tenacity retries with
exponential backoff and jitter on transient failures, and a circuit
breaker. Argument and data integrity errors pass straight through.

Dependencies: tenacity, asyncio, ragcore.core.resilience.circuit_breaker
System role: Timeout, retry and fail-fast wrapper around embedding and vector store I/O
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragcore.configs.resilience import ResilienceSettings
from ragcore.core.exceptions import (
    CircuitOpenError,
    DataIntegrityError,
    InvalidArgumentError,
    ProviderUnavailableError,
)
from ragcore.core.resilience.circuit_breaker import CircuitBreaker

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors that describe the request, not the provider
_NON_PROVIDER_ERRORS = (InvalidArgumentError, DataIntegrityError)


class ResiliencePolicy:
    """Timeout + retry + circuit breaker around one dependency."""

    def __init__(
        self,
        name: str,
        timeout_seconds: float,
        max_attempts: int,
        backoff_initial: float,
        backoff_max: float,
        breaker: CircuitBreaker | None = None,
        jitter: float | None = None,
    ) -> None:
        """
        Initialize policy.

        Args:
            name: Dependency name used in errors and logs
            timeout_seconds: Deadline for each attempt
            max_attempts: Total attempts including the first
            backoff_initial: First retry delay in seconds
            backoff_max: Upper bound for retry delays
            breaker: Circuit breaker (shared between policies of one dependency)
            jitter: Maximum random jitter added per delay (defaults to backoff_initial)
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        self.name = name
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max
        self.breaker = breaker
        self._jitter = backoff_initial if jitter is None else jitter

    async def call(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """
        Run fn under the policy.

        Args:
            fn: Async callable performing the provider I/O
            *args: Positional arguments for fn
            **kwargs: Keyword arguments for fn

        Returns:
            T: Result of fn

        Raises:
            ProviderUnavailableError: Timeouts and transport failures after retries
            CircuitOpenError: Circuit open, provider not called
            InvalidArgumentError, DataIntegrityError: Propagated unchanged, not retried
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.backoff_initial,
                max=self.backoff_max,
                jitter=self._jitter,
            ),
            retry=(
                retry_if_exception_type(ProviderUnavailableError)
                & retry_if_not_exception_type(CircuitOpenError)
            ),
            before_sleep=self._log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._attempt(fn, *args, **kwargs)
        raise AssertionError("unreachable: tenacity reraises the final error")

    async def _attempt(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        if self.breaker is not None:
            self.breaker.before_call()

        try:
            result = await asyncio.wait_for(fn(*args, **kwargs), timeout=self.timeout_seconds)
        except _NON_PROVIDER_ERRORS:
            if self.breaker is not None:
                self.breaker.record_ignored()
            raise
        except asyncio.CancelledError:
            if self.breaker is not None:
                self.breaker.record_ignored()
            raise
        except (asyncio.TimeoutError, TimeoutError) as e:
            self._record_failure()
            raise ProviderUnavailableError(
                f"{self.name} call timed out after {self.timeout_seconds}s",
                provider=self.name,
                details={"timeout_seconds": self.timeout_seconds},
            ) from e
        except ProviderUnavailableError:
            self._record_failure()
            raise
        except OSError as e:
            self._record_failure()
            raise ProviderUnavailableError(
                f"{self.name} transport failure: {type(e).__name__}",
                provider=self.name,
            ) from e
        except Exception:
            self._record_failure()
            raise

        if self.breaker is not None:
            self.breaker.record_success()
        return result

    def _record_failure(self) -> None:
        if self.breaker is not None:
            self.breaker.record_failure()

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{__name__}:call - {self.name} retry {retry_state.attempt_number}/{self.max_attempts} "
            f"after {type(exc).__name__ if exc else 'error'}",
            extra={"provider": self.name, "attempt": retry_state.attempt_number},
        )


def breaker_from_settings(name: str, settings: ResilienceSettings) -> CircuitBreaker:
    return CircuitBreaker(
        name=name,
        failure_rate_threshold=settings.breaker_failure_rate_threshold,
        minimum_calls=settings.breaker_minimum_calls,
        window_seconds=settings.breaker_window_seconds,
        cooldown_seconds=settings.breaker_cooldown_seconds,
    )


def search_policy(
    settings: ResilienceSettings,
    breaker: CircuitBreaker | None = None,
    name: str = "vector_store",
) -> ResiliencePolicy:
    """Strict budget for vector store queries and deletes."""
    return ResiliencePolicy(
        name=name,
        timeout_seconds=settings.search_timeout_seconds,
        max_attempts=settings.search_max_attempts,
        backoff_initial=settings.search_backoff_initial,
        backoff_max=settings.search_backoff_max,
        breaker=breaker,
    )


def index_policy(
    settings: ResilienceSettings,
    breaker: CircuitBreaker | None = None,
    name: str = "vector_store",
) -> ResiliencePolicy:
    """Search retry budget with the longer index write timeout."""
    return ResiliencePolicy(
        name=name,
        timeout_seconds=settings.index_timeout_seconds,
        max_attempts=settings.search_max_attempts,
        backoff_initial=settings.search_backoff_initial,
        backoff_max=settings.search_backoff_max,
        breaker=breaker,
    )


def embedding_policy(
    settings: ResilienceSettings,
    breaker: CircuitBreaker | None = None,
    name: str = "embedding",
) -> ResiliencePolicy:
    """Looser budget for embedding calls."""
    return ResiliencePolicy(
        name=name,
        timeout_seconds=settings.embedding_timeout_seconds,
        max_attempts=settings.embedding_max_attempts,
        backoff_initial=settings.embedding_backoff_initial,
        backoff_max=settings.embedding_backoff_max,
        breaker=breaker,
    )
