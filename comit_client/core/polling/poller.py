"""
Swap state poller.

Fetches a swap until its ``state`` equals a target, or the budget runs out.
The comparison is exact: if cnd moves through the target state and past it
between two fetches, the poll times out even though the swap progressed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ...config import settings
from ...providers.cnd import Cnd
from ...types.siren import SwapResource
from ..errors import PollTimeoutError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[SwapResource]]
Sleeper = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


class PollConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    poll_interval_ms: int = Field(
        default_factory=lambda: settings.poll_interval_ms,
        ge=1,
        validation_alias=AliasChoices("poll_interval_ms", "pollIntervalMs"),
        description="Delay between attempts",
    )
    timeout_ms: int = Field(
        default_factory=lambda: settings.poll_timeout_ms,
        ge=0,
        validation_alias=AliasChoices("timeout_ms", "timeoutMs"),
        description="Total polling budget",
    )

    @property
    def interval_s(self) -> float:
        return self.poll_interval_ms / 1000

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000


async def poll_until_state(
    fetch: Fetcher,
    url: str,
    target: str,
    config: Optional[PollConfig] = None,
    *,
    sleep: Sleeper = asyncio.sleep,
    clock: Clock = time.monotonic,
) -> SwapResource:
    """
    Poll ``url`` until the swap reports ``target``.

    Returns:
        The swap exactly as fetched in the matching attempt

    Raises:
        PollTimeoutError: ``target`` was not seen within ``config.timeout_ms``;
            carries the last observed state
    """
    config = config or PollConfig()
    started = clock()
    deadline = started + config.timeout_s
    attempts = 0

    while True:
        swap = await fetch(url)
        attempts += 1
        if swap.state == target:
            logger.debug("Swap %s reached %s after %d attempt(s)", url, target, attempts)
            return swap

        now = clock()
        remaining = deadline - now
        if remaining <= 0:
            elapsed = now - started
            logger.warning(
                "Swap %s stuck in %s, wanted %s (%.2fs, %d attempts)",
                url,
                swap.state,
                target,
                elapsed,
                attempts,
            )
            raise PollTimeoutError(url, target, swap.state, elapsed)

        logger.debug("Swap %s is %s, waiting for %s", url, swap.state, target)
        await sleep(min(config.interval_s, remaining))


class SwapPoller:
    """Binds the poller to a cnd client and a poll configuration."""

    def __init__(
        self,
        cnd: Cnd,
        config: Optional[PollConfig] = None,
        *,
        sleep: Sleeper = asyncio.sleep,
        clock: Clock = time.monotonic,
    ) -> None:
        self.cnd = cnd
        self.config = config or PollConfig()
        self._sleep = sleep
        self._clock = clock

    async def until(self, url: str, target: str) -> SwapResource:
        return await poll_until_state(
            self.cnd.fetch_swap,
            url,
            target,
            self.config,
            sleep=self._sleep,
            clock=self._clock,
        )
