from typing import Callable, Optional, Tuple, Type, TypeVar
import logging
import time
from ..config import RetryConfig
from ..exceptions import CatalogError, FilesystemError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE: Tuple[Type[Exception], ...] = (CatalogError, FilesystemError)

class RetryPolicy:
    """
    Exponential backoff around catalog and filesystem calls.
    max_attempts=1 means a single call, no retry.
    """
    def __init__(self, max_attempts: int = 1, base_delay: float = 1.0,
                 max_delay: float = 30.0,
                 retry_on: Tuple[Type[Exception], ...] = RETRYABLE,
                 sleep: Optional[Callable[[float], None]] = None):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.retry_on = retry_on
        self._sleep = sleep or time.sleep

    @classmethod
    def from_config(cls, config: RetryConfig, **kwargs) -> "RetryPolicy":
        return cls(config.max_attempts, config.base_delay, config.max_delay, **kwargs)

    def delay(self, attempt: int) -> float:
        return min(self.base_delay * (2 ** attempt), self.max_delay)

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        for attempt in range(self.max_attempts):
            try:
                return fn(*args, **kwargs)
            except self.retry_on as e:
                if attempt + 1 >= self.max_attempts:
                    raise
                wait = self.delay(attempt)
                logger.warning(
                    "%s failed (attempt %d/%d): %s; retrying in %.1fs",
                    getattr(fn, "__name__", "call"), attempt + 1, self.max_attempts, e, wait,
                )
                self._sleep(wait)
        raise AssertionError("unreachable")

NO_RETRY = RetryPolicy(max_attempts=1)
