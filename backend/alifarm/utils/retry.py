"""
Bounded retry with exponential backoff for read operations.

Writes (allocation, expenses, settlement) are not idempotent and must never
go through this helper: the caller re-checks state instead.
"""
from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Tuple, Type

from alifarm.core.config import settings
from alifarm.services.investors.errors import TransientStorageError

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_attempts: int = field(default_factory=lambda: settings.READ_RETRY_ATTEMPTS)
    base_delay: float = field(default_factory=lambda: settings.READ_RETRY_BASE_DELAY)
    max_delay: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = (TransientStorageError,)

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for retry attempt (exponential backoff)."""
        return min(self.base_delay * (2 ** attempt), self.max_delay)


def retry_read(config: RetryConfig | None = None, sleep: Callable[[float], None] = time.sleep):
    """Decorator retrying a read on transient storage errors."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            cfg = config or RetryConfig()
            attempts = max(cfg.max_attempts, 1)
            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except cfg.retry_on as exc:
                    if attempt + 1 >= attempts:
                        raise
                    delay = cfg.get_delay(attempt)
                    logger.warning(
                        f"{func.__name__} failed ({exc}), retrying in {delay:.2f}s "
                        f"(attempt {attempt + 1}/{attempts})"
                    )
                    sleep(delay)

        return wrapper

    return decorator
