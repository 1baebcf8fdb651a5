"""Per-session state threaded through every engine and executor call."""

import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from playwright.async_api import Page

from staybot.constants import Timeouts
from staybot.core.exceptions import ConfigurationError, StaleReferenceError
from staybot.core.logger import session_id_ctx
from staybot.utils.selectors import LocatorRegistry


class PageHandle:
    """
    A live page together with the locator section of one page kind.

    Handles are never mutated after navigation; the session supersedes the
    old handle and the next page binds a new one.
    """

    def __init__(self, session: "SessionContext", name: str, registry: LocatorRegistry):
        self.session = session
        self.name = name
        self.registry = registry
        self._section = registry.section(name)
        self._superseded = False

    @property
    def page(self) -> Page:
        return self.session.page

    @property
    def superseded(self) -> bool:
        return self._superseded

    def ensure_live(self) -> None:
        """
        Raises:
            StaleReferenceError: If navigation has superseded this handle
        """
        if self._superseded:
            raise StaleReferenceError(self.name, "page handle superseded by navigation")

    def supports(self, key: str) -> bool:
        """Whether this page kind defines a locator for ``key``."""
        return key in self._section

    def selector(self, key: str, **fmt: str) -> str:
        """
        Primary selector for ``key``, with ``{placeholders}`` filled from ``fmt``.

        Raises:
            ConfigurationError: If the page kind has no such locator
        """
        value = self.registry.get(f"{self.name}.{key}")
        if value is None:
            raise ConfigurationError(
                f"No '{key}' locator for page '{self.name}'",
                details={"page": self.name, "key": key},
            )
        return value.format(**fmt) if fmt else value

    def fallback(self, key: str, **fmt: str) -> Optional[str]:
        """First fallback selector for ``key``, if any."""
        fallbacks = self.registry.get_fallbacks(f"{self.name}.{key}")
        if not fallbacks:
            return None
        return fallbacks[0].format(**fmt) if fmt else fallbacks[0]

    def __repr__(self) -> str:
        state = "superseded" if self._superseded else "live"
        return f"PageHandle({self.name!r}, {state})"


class SessionContext:
    """One browser session: its page, its id and its single live handle."""

    def __init__(
        self,
        page: Page,
        session_id: Optional[str] = None,
        navigation_timeout: float = Timeouts.NAVIGATION,
    ):
        self.page = page
        self.session_id = session_id or uuid.uuid4().hex[:8]
        self.navigation_timeout = navigation_timeout
        self._handle: Optional[PageHandle] = None

    @property
    def handle(self) -> Optional[PageHandle]:
        return self._handle

    @property
    def current_url(self) -> str:
        return self.page.url

    def bind(self, handle: PageHandle) -> PageHandle:
        """Make ``handle`` the live handle, superseding the previous one."""
        if self._handle is not None and self._handle is not handle:
            self._handle._superseded = True
            logger.debug(f"{self._handle.name} handle superseded by {handle.name}")
        self._handle = handle
        return handle

    def supersede(self) -> None:
        """Invalidate the live handle without binding a new one."""
        if self._handle is not None:
            self._handle._superseded = True
            self._handle = None

    async def navigate(self, url: str) -> None:
        """Load ``url`` in this session; any live handle becomes stale."""
        logger.info(f"Navigating to {url}")
        self.supersede()
        await self.page.goto(
            url, wait_until="domcontentloaded", timeout=self.navigation_timeout * 1000
        )

    @contextmanager
    def log_scope(self) -> Iterator["SessionContext"]:
        """Bind this session's id into the log context."""
        token = session_id_ctx.set(self.session_id)
        try:
            yield self
        finally:
            session_id_ctx.reset(token)
