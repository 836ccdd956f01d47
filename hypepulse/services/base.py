"""
Base service class for HypePulse upstream services.

Provides retry logic with exponential backoff for transient upstream failures.
"""

import asyncio
from typing import Any, Awaitable, Callable

from hypepulse.constants import UpstreamConstants
from hypepulse.utils.exceptions import TransientUpstreamError, UpstreamUnavailable
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)


class BaseService:
    """Base class for services that talk to flaky upstreams."""

    def __init__(
        self,
        max_attempts: int = UpstreamConstants.MAX_ATTEMPTS,
        base_delay: float = UpstreamConstants.RETRY_BASE_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize base service with retry settings.

        Args:
            max_attempts: Total attempts per call, including the first one
            base_delay: Delay after the first failed attempt, doubled after each further one
            sleep: Awaitable sleep function (replaceable in tests)
        """
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    async def execute_with_retry(self, func: Callable[[], Awaitable[Any]], context: str) -> Any:
        """Execute a function with automatic retry on transient upstream errors.

        Any other exception propagates on the first occurrence.
        """
        for attempt in range(self.max_attempts):
            try:
                return await func()
            except TransientUpstreamError as e:
                if attempt == self.max_attempts - 1:
                    logger.error(f"Giving up after {self.max_attempts} attempts: {e}")
                    raise UpstreamUnavailable(
                        f"{e} (gave up after {self.max_attempts} attempts)",
                        attempts=self.max_attempts
                    ) from e
                delay = self.base_delay * (2 ** attempt)  # Exponential backoff
                logger.warning(f"Retry attempt {attempt + 1} for {context} in {delay:.2f}s: {e}")
                await self._sleep(delay)
