"""Condition polling with an explicit budget."""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError

from staybot.core.exceptions import WaitTimeoutError
from staybot.core.result import Result, err, ok
from staybot.models import WaitSpec
from staybot.resilience.conditions import Condition
from staybot.services.session import SessionContext

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[Any]]


class SynchronizationEngine:
    """
    Poll a condition until it holds or its budget runs out.

    The engine keeps no per-session state; every call receives the session it
    operates on. The final evaluation happens at the deadline, so a wait
    overruns its timeout by at most one poll interval.
    """

    def __init__(
        self,
        default_spec: WaitSpec,
        probe_spec: Optional[WaitSpec] = None,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the engine.

        Args:
            default_spec: Budget used when a call passes no spec
            probe_spec: Budget for expected-negative checks; defaults to default_spec
            clock: Monotonic clock in seconds
            sleep: Awaitable sleep
        """
        self.default_spec = default_spec
        self.probe_spec = probe_spec or default_spec
        self._clock = clock
        self._sleep = sleep

    async def wait(
        self,
        session: SessionContext,
        condition: Condition,
        spec: Optional[WaitSpec] = None,
    ) -> Any:
        """
        Wait for ``condition`` and return the UI reference it yields.

        Driver errors raised while evaluating count as "not yet"; the last one
        is reported on timeout.

        Raises:
            WaitTimeoutError: If the condition does not hold within the budget
        """
        spec = spec or self.default_spec
        start = self._clock()
        deadline = start + spec.timeout
        last_error: Optional[str] = None

        while True:
            try:
                value = await condition.evaluate(session.page)
            except PlaywrightError as e:
                value = None
                last_error = str(e).splitlines()[0] if str(e) else type(e).__name__

            if value is not None:
                return value

            now = self._clock()
            if now >= deadline:
                elapsed = now - start
                logger.debug(
                    f"Wait for {condition.describe()} timed out after {elapsed:.2f}s"
                )
                raise WaitTimeoutError(condition.describe(), elapsed, spec.timeout, last_error)

            await self._sleep(min(spec.poll_interval, deadline - now))

    async def check(
        self,
        session: SessionContext,
        condition: Condition,
        spec: Optional[WaitSpec] = None,
    ) -> Result[Any]:
        """
        Probe a condition whose absence is an expected outcome.

        Uses the probe budget unless ``spec`` is given.

        Returns:
            Success with the UI reference, or Failure wrapping the WaitTimeoutError
        """
        try:
            return ok(await self.wait(session, condition, spec or self.probe_spec))
        except WaitTimeoutError as e:
            return err(e.message, e)
