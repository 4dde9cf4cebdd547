"""
RateLimiter module for spacing out requests to the Twitch API
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional


class RateLimiter:
    """
    Enforces a minimum interval between consecutive requests

    The last request time is plain instance state with no locking, so a
    limiter shared between threads can let requests through early.
    """

    def __init__(self, min_interval_seconds: float = 1.0,
                 clock: Optional[Callable[[], float]] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        self.min_interval_seconds = min_interval_seconds
        self.clock = clock or time.monotonic
        self.sleep = sleep or (lambda seconds: time.sleep(seconds))
        self.last_request_time: Optional[float] = None
        self.logger = logging.getLogger(__name__)

    def wait(self) -> float:
        """
        Block until the minimum interval since the last request has elapsed

        Returns:
            Number of seconds slept (0.0 when no delay was needed)
        """
        if self.last_request_time is None:
            # First request, no delay needed
            return 0.0

        time_since_last = self.clock() - self.last_request_time
        if time_since_last >= self.min_interval_seconds:
            return 0.0

        delay = self.min_interval_seconds - time_since_last
        self.logger.debug(f"Rate limit: sleeping {delay:.3f}s before next request")
        self.sleep(delay)
        return delay

    def record_request(self) -> None:
        """Mark the current time as the completion of the latest request"""
        self.last_request_time = self.clock()

    @contextmanager
    def throttle(self) -> Iterator[None]:
        """
        Wait for the interval, run the wrapped request, then record its completion

        The completion time is recorded even if the request raised.
        """
        self.wait()
        try:
            yield
        finally:
            self.record_request()
