"""Adaptive rate limiter with jitter for vlr.gg request pacing.

Randomized delays keep the client from hammering the site at a fixed
interval. The limiter tracks elapsed time between requests so time spent
parsing counts toward the delay.

Fully async -- uses asyncio.sleep and asyncio.Lock so concurrent
fetches are properly serialized without blocking the event loop.
"""

import asyncio
import logging
import random
import time

from vlr_scraper.config import ScraperConfig

logger = logging.getLogger(__name__)


class RateLimiter:
    """Manages delays between HTTP requests with jitter and adaptive backoff.

    The delay between requests is randomized within [current_delay, current_delay * 1.5],
    never reaching past max_delay unless backoff has already pushed it there.
    After a failed request the client calls backoff() to increase the delay;
    on success it calls recover() to gradually decrease it. Nothing is retried
    here: backoff only slows down the *next* request.

    Time already spent since the last request is subtracted from the wait,
    so if parsing took 2 seconds and the delay is 3 seconds, only 1 second
    of actual sleep occurs.
    """

    def __init__(self, config: ScraperConfig | None = None):
        if config is None:
            config = ScraperConfig()

        self._min_delay = config.min_delay
        self._max_delay = config.max_delay
        self._backoff_factor = config.backoff_factor
        self._recovery_factor = config.recovery_factor
        self._max_backoff = config.max_backoff
        self._current_delay = config.min_delay
        self._last_request_time: float = 0.0
        self._lock = asyncio.Lock()

    @property
    def current_delay(self) -> float:
        """Current base delay value in seconds."""
        return self._current_delay

    async def wait(self) -> float:
        """Sleep for a jittered delay, accounting for elapsed time.

        Returns:
            The jittered delay value (before elapsed-time adjustment).
        """
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time

            # Jitter: uniform random in [current_delay, current_delay * 1.5],
            # the upper bound capped at max_delay unless backoff went past it
            upper = min(
                self._current_delay * 1.5, max(self._current_delay, self._max_delay)
            )
            jittered_delay = random.uniform(self._current_delay, upper)

            remaining = max(0.0, jittered_delay - elapsed)
            if remaining > 0:
                await asyncio.sleep(remaining)

            self._last_request_time = time.monotonic()
            return jittered_delay

    def backoff(self) -> None:
        """Increase delay after a failed request."""
        self._current_delay = min(
            max(self._current_delay, 0.1) * self._backoff_factor,
            self._max_backoff,
        )
        logger.warning(
            "Rate limiter backoff: delay now %.1fs", self._current_delay
        )

    def recover(self) -> None:
        """Gradually decrease delay after a successful request."""
        self._current_delay = max(
            self._current_delay * self._recovery_factor,
            self._min_delay,
        )
