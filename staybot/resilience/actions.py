"""UI actions with synchronization, fallback locators and stale-element retry."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from staybot.constants import Delays, Retries
from staybot.core.exceptions import (
    ElementNotFoundError,
    StaleReferenceError,
    WaitTimeoutError,
)
from staybot.models import WaitSpec
from staybot.resilience.conditions import ElementClickable, ElementVisible
from staybot.resilience.synchronization import SynchronizationEngine
from staybot.services.session import SessionContext

# Stdlib logger needed for tenacity's before_sleep_log
retry_logger = logging.getLogger(__name__)

_STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "execution context was destroyed",
    "frame was detached",
    "target closed",
    "stale element",
)


def classify_driver_error(error: PlaywrightError, selector: str) -> Exception:
    """Map a Playwright error onto the staybot taxonomy."""
    message = str(error)
    if isinstance(error, PlaywrightTimeoutError):
        return WaitTimeoutError(f"driver action on '{selector}'", 0.0, 0.0, message)
    lowered = message.lower()
    if any(marker in lowered for marker in _STALE_MARKERS):
        return StaleReferenceError(selector, message.splitlines()[0])
    return error


class ResilientActionExecutor:
    """Perform clicks and typing once the target is ready."""

    def __init__(
        self,
        engine: SynchronizationEngine,
        stale_retry_attempts: int = Retries.MAX_SET_TEXT,
        stale_retry_delay: float = Delays.STALE_RETRY,
        stepper_click_delay: float = Delays.STEPPER_CLICK,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if not 0 <= stepper_click_delay <= Delays.STEPPER_CLICK_MAX:
            raise ValueError(
                f"stepper_click_delay must be within 0..{Delays.STEPPER_CLICK_MAX} seconds"
            )
        self.engine = engine
        self.stale_retry_attempts = stale_retry_attempts
        self.stale_retry_delay = stale_retry_delay
        self.stepper_click_delay = stepper_click_delay
        self._sleep = sleep

    async def _act(self, selector: str, action: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await action()
        except PlaywrightError as e:
            classified = classify_driver_error(e, selector)
            if classified is e:
                raise
            raise classified from e

    async def click(
        self, session: SessionContext, selector: str, spec: Optional[WaitSpec] = None
    ) -> Locator:
        """
        Wait until ``selector`` is clickable, then click it.

        Raises:
            WaitTimeoutError: If the element never becomes clickable
            StaleReferenceError: If the element detached mid-click
        """
        element: Locator = await self.engine.wait(session, ElementClickable(selector), spec)
        await self._act(selector, element.click)
        logger.debug(f"Clicked '{selector}'")
        return element

    async def click_with_fallback(
        self,
        session: SessionContext,
        primary: str,
        fallback: Optional[str],
        spec: Optional[WaitSpec] = None,
    ) -> Locator:
        """
        Click ``primary``; on a timeout or structural fault retry once with ``fallback``.

        The fallback's own failure propagates to the caller.
        """
        try:
            return await self.click(session, primary, spec)
        except (WaitTimeoutError, ElementNotFoundError) as e:
            if not fallback:
                raise
            logger.warning(f"Primary locator '{primary}' failed ({e.message}), trying fallback")
            return await self.click(session, fallback, spec)

    async def set_text_with_retry(
        self,
        session: SessionContext,
        selector: str,
        text: str,
        max_attempts: Optional[int] = None,
    ) -> None:
        """
        Focus, clear and type ``text``, repeating the whole sequence on stale faults.

        Raises:
            StaleReferenceError: If every attempt hit a stale element
            WaitTimeoutError: If the field never becomes clickable
        """
        attempts = max_attempts or self.stale_retry_attempts
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(self.stale_retry_delay),
            retry=retry_if_exception_type(StaleReferenceError),
            before_sleep=before_sleep_log(retry_logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        ):
            with attempt:
                element = await self.click(session, selector)
                await self._act(selector, lambda: element.fill(""))
                await self._act(selector, lambda: element.press_sequentially(text))
        logger.debug(f"Typed {len(text)} characters into '{selector}'")

    async def repeat_click(
        self,
        session: SessionContext,
        selector: str,
        count: int,
        inter_click_delay: Optional[float] = None,
    ) -> int:
        """
        Click ``selector`` ``count`` times with a fixed pause between clicks.

        Returns:
            Number of clicks performed
        """
        if count < 0:
            raise ValueError("count must be >= 0")
        delay = self.stepper_click_delay if inter_click_delay is None else inter_click_delay
        if not 0 <= delay <= Delays.STEPPER_CLICK_MAX:
            raise ValueError(
                f"inter_click_delay must be within 0..{Delays.STEPPER_CLICK_MAX} seconds"
            )
        for i in range(count):
            if i:
                await self._sleep(delay)
            await self.click(session, selector)
        return count

    async def read_text(
        self, session: SessionContext, selector: str, spec: Optional[WaitSpec] = None
    ) -> str:
        """Wait until ``selector`` is visible and return its trimmed inner text."""
        element: Locator = await self.engine.wait(session, ElementVisible(selector), spec)
        text = await self._act(selector, element.inner_text)
        return text.strip()
