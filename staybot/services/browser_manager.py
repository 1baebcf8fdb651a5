"""Browser lifecycle and session creation."""

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright

from staybot.core.config.settings import StayBotSettings
from staybot.services.session import SessionContext


class BrowserManager:
    """Launch chromium once and hand out one SessionContext per browser context."""

    def __init__(self, settings: StayBotSettings):
        """
        Initialize browser manager.

        Args:
            settings: Headless flag, window size, image blocking, navigation timeout
        """
        self.settings = settings
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    def _launch_args(self) -> List[str]:
        args = [f"--window-size={self.settings.window_width},{self.settings.window_height}"]
        if self.settings.block_images:
            args.append("--blink-settings=imagesEnabled=false")
        return args

    async def start(self) -> None:
        """Launch the browser."""
        if self.browser is not None:
            logger.warning("Browser already started")
            return

        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(
            headless=self.settings.headless, args=self._launch_args()
        )
        logger.info(
            f"Browser started (headless={self.settings.headless}, "
            f"window={self.settings.window_width}x{self.settings.window_height}, "
            f"images={'off' if self.settings.block_images else 'on'})"
        )

    async def new_session(self, session_id: Optional[str] = None) -> SessionContext:
        """
        Open an isolated browser context with one page.

        Raises:
            RuntimeError: If the browser has not been started
        """
        if self.browser is None:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options: Dict[str, Any] = {
            "viewport": {
                "width": self.settings.window_width,
                "height": self.settings.window_height,
            },
        }
        context = await self.browser.new_context(**context_options)
        context.set_default_navigation_timeout(self.settings.navigation_timeout_seconds * 1000)
        self._contexts.append(context)

        page = await context.new_page()
        session = SessionContext(
            page,
            session_id=session_id,
            navigation_timeout=self.settings.navigation_timeout_seconds,
        )
        logger.info(f"Session {session.session_id} opened")
        return session

    async def close(self) -> None:
        """Close every context, the browser and Playwright."""
        for context in self._contexts:
            await context.close()
        self._contexts.clear()

        if self.browser:
            await self.browser.close()
            self.browser = None

        if self.playwright:
            await self.playwright.stop()
            self.playwright = None

        logger.info("Browser closed")

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
