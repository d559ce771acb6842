"""Service for executing API calls with automatic retries.

Every attempt that raises a retryable error or returns an unsuccessful
response is followed by a randomized pause before the next attempt. The
pause is drawn uniformly from ``[1, attempt * backoff_factor]`` seconds, so
the window widens linearly with each attempt while individual draws stay
random. After the last attempt its response is returned as-is.
"""

import logging
import random
import time
from typing import Any, Callable, Optional, Tuple, Type

import httpx

from geocli.domain.events.api_events import ApiCallFailed, ApiCallSucceeded, RetryScheduled
from geocli.domain.models.errors import ConfigurationError, InvalidResponseError

# Transport level problems worth another attempt. httpx.HTTPError covers
# connect/read timeouts and HTTP status errors; ValueError covers bodies
# that are not valid JSON.
RETRYABLE_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    httpx.HTTPError,
    InvalidResponseError,
    ValueError,
)

NON_RETRYABLE_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    ConfigurationError,
    TypeError,
)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BACKOFF_FACTOR = 5

# Shared by every retry loop unless a caller injects its own generator.
_RANDOM = random.Random()

logger = logging.getLogger(__name__)

# --- Custom Exceptions ---
class MaxRetryError(Exception):
    """Exception raised when the final attempt still failed with an error."""
    def __init__(self, original_exception: BaseException, attempts: int):
        self.original_exception = original_exception
        self.attempts = attempts
        super().__init__(f"Max attempts ({attempts}) exceeded. Last error: {original_exception}")

# --- Retry Service ---

class ApiRetryService:
    """Runs a call up to ``max_attempts`` times with randomized linear backoff.

    The service holds no per-call state, so one instance can be shared by
    all worker threads of a batch.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_factor: int = DEFAULT_BACKOFF_FACTOR,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initializes the ApiRetryService.

        Args:
            max_attempts: Total number of attempts, first call included.
            backoff_factor: Scale of the backoff window per attempt.
            rng: Random source for backoff draws (seed it for reproducible tests).
            sleep: Blocking sleep used between attempts.
        """
        if max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
        if backoff_factor < 1:
            raise ConfigurationError(f"backoff_factor must be at least 1, got {backoff_factor}")
        self.max_attempts = max_attempts
        self.backoff_factor = backoff_factor
        self.rng = rng or _RANDOM
        self.sleep = sleep
        self.retryable_exceptions = RETRYABLE_EXCEPTIONS
        self.non_retryable_exceptions = NON_RETRYABLE_EXCEPTIONS

        logger.debug(
            f"ApiRetryService initialized: max_attempts={max_attempts}, backoff_factor={backoff_factor}"
        )

    def backoff_seconds(self, attempt: int) -> int:
        """Draws the pause that follows failed attempt number ``attempt`` (1-based)."""
        return self.rng.randint(1, attempt * self.backoff_factor)

    def execute_with_retry(
        self,
        func: Callable[..., Any],
        *args: Any,
        is_success: Callable[[Any], bool],
        endpoint_name: Optional[str] = None,
        **kwargs: Any
    ) -> Any:
        """Executes a function with retries.

        Args:
            func: The function (API call) to execute.
            *args: Positional arguments for the function.
            is_success: Predicate deciding whether a returned value ends the loop.
            endpoint_name: Name used in logs and events (defaults to func name).
            **kwargs: Keyword arguments for the function.

        Returns:
            The first successful result, or the result of the last attempt.

        Raises:
            MaxRetryError: If the last attempt raised a retryable exception.
            Exception: If a non-retryable exception occurs.
        """
        effective_endpoint = endpoint_name or getattr(func, "__name__", repr(func))
        last_exception: Optional[BaseException] = None
        result: Any = None

        def dispatch_event(event: Any) -> None:
            logger.debug(f"EVENT: {event}")

        for attempt in range(1, self.max_attempts + 1):
            last_exception = None
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except self.non_retryable_exceptions as e:
                logger.error(f"Non-retryable error calling {effective_endpoint} on attempt {attempt}: {e}", exc_info=True)
                dispatch_event(ApiCallFailed(endpoint=effective_endpoint, attempts=attempt, error_type=type(e).__name__, error_message=str(e)))
                raise
            except self.retryable_exceptions as e:
                last_exception = e
                reason = f"{type(e).__name__}: {e}"
            else:
                if is_success(result):
                    latency_ms = (time.perf_counter() - start_time) * 1000
                    dispatch_event(ApiCallSucceeded(endpoint=effective_endpoint, attempt_number=attempt, latency_ms=latency_ms))
                    return result
                reason = "unsuccessful response"

            if attempt == self.max_attempts:
                break

            delay = self.backoff_seconds(attempt)
            logger.warning(
                f"Attempt {attempt}/{self.max_attempts} calling {effective_endpoint} failed ({reason}). "
                f"Waiting {delay}s..."
            )
            dispatch_event(RetryScheduled(endpoint=effective_endpoint, attempt_number=attempt, delay_seconds=delay, reason=reason))
            self.sleep(delay)

        if last_exception is not None:
            dispatch_event(ApiCallFailed(
                endpoint=effective_endpoint,
                attempts=self.max_attempts,
                error_type=type(last_exception).__name__,
                error_message=str(last_exception),
            ))
            raise MaxRetryError(last_exception, self.max_attempts) from last_exception

        logger.info(f"Giving up on {effective_endpoint} after {self.max_attempts} attempts; returning last response.")
        return result
