"""
Service context and factory for staybot dependency management.

Groups the collaborators every page surface needs into one immutable object,
so pages are constructed from a single argument and tests can swap parts.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from staybot.core.config.settings import StayBotSettings
from staybot.resilience.actions import ResilientActionExecutor
from staybot.resilience.synchronization import SynchronizationEngine
from staybot.services.booking.calendar_navigator import CalendarNavigator
from staybot.services.booking.result_aggregator import ResultAggregator
from staybot.utils.error_capture import ErrorCapture
from staybot.utils.selectors import LocatorRegistry
from staybot.utils.url_codec import UrlStateCodec


@dataclass(frozen=True)
class InteractionContext:
    """
    Interaction services context.

    Attributes:
        settings: Validated settings the services were built from
        registry: Locator registry
        engine: Synchronization engine
        executor: Resilient action executor
        calendar: Forward-only calendar navigator
        aggregator: Result aggregator
        codec: URL state codec
        error_capture: Failure diagnostics writer
    """

    settings: StayBotSettings
    registry: LocatorRegistry
    engine: SynchronizationEngine
    executor: ResilientActionExecutor
    calendar: CalendarNavigator
    aggregator: ResultAggregator
    codec: UrlStateCodec
    error_capture: ErrorCapture


class InteractionServiceFactory:
    """Factory for creating the interaction context from settings."""

    @staticmethod
    def create(
        settings: StayBotSettings,
        registry: Optional[LocatorRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> InteractionContext:
        """
        Build every interaction service from one settings object.

        Args:
            settings: Application settings
            registry: Optional pre-built LocatorRegistry (for dependency injection)
            clock: Monotonic clock handed to the engine
            sleep: Awaitable sleep handed to the engine and executor

        Returns:
            InteractionContext with all services wired together
        """
        registry = registry or LocatorRegistry(settings.selectors_file)
        engine = SynchronizationEngine(
            settings.wait_spec(), settings.probe_spec(), clock=clock, sleep=sleep
        )
        executor = ResilientActionExecutor(
            engine,
            stale_retry_attempts=settings.stale_retry_attempts,
            stale_retry_delay=settings.stale_retry_delay,
            stepper_click_delay=settings.stepper_click_delay,
            sleep=sleep,
        )
        context = InteractionContext(
            settings=settings,
            registry=registry,
            engine=engine,
            executor=executor,
            calendar=CalendarNavigator(
                engine, executor, registry, max_forward_pages=settings.max_calendar_pages
            ),
            aggregator=ResultAggregator(
                engine, executor, registry, min_cards=settings.min_result_cards
            ),
            codec=UrlStateCodec.from_settings(settings),
            error_capture=ErrorCapture(settings.screenshots_dir),
        )
        logger.debug(f"Interaction services ready (selectors version: {registry.version})")
        return context
