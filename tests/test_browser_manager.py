"""Tests for browser lifecycle management."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from staybot.services.browser_manager import BrowserManager
from staybot.services.session import SessionContext


@pytest.fixture
def playwright_mocks():
    """async_playwright() chain down to a page."""
    page = MagicMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()
    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)

    with patch("staybot.services.browser_manager.async_playwright", return_value=starter):
        yield {
            "playwright": playwright,
            "browser": browser,
            "context": context,
            "page": page,
        }


class TestBrowserManager:
    """Test BrowserManager functionality."""

    @pytest.mark.asyncio
    async def test_start_launch_args(self, settings, playwright_mocks):
        manager = BrowserManager(settings)
        await manager.start()

        launch = playwright_mocks["playwright"].chromium.launch
        launch.assert_awaited_once()
        kwargs = launch.await_args.kwargs
        assert kwargs["headless"] is True
        assert "--window-size=1920,1080" in kwargs["args"]
        assert "--blink-settings=imagesEnabled=false" in kwargs["args"]

    @pytest.mark.asyncio
    async def test_images_enabled(self, settings, playwright_mocks):
        settings.block_images = False
        await BrowserManager(settings).start()

        args = playwright_mocks["playwright"].chromium.launch.await_args.kwargs["args"]
        assert "--blink-settings=imagesEnabled=false" not in args

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, settings, playwright_mocks):
        manager = BrowserManager(settings)
        await manager.start()
        await manager.start()

        playwright_mocks["playwright"].chromium.launch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_new_session_requires_start(self, settings):
        with pytest.raises(RuntimeError):
            await BrowserManager(settings).new_session()

    @pytest.mark.asyncio
    async def test_new_session(self, settings, playwright_mocks):
        async with BrowserManager(settings) as manager:
            session = await manager.new_session("abc")

            assert isinstance(session, SessionContext)
            assert session.session_id == "abc"
            assert session.page is playwright_mocks["page"]
            assert session.navigation_timeout == settings.navigation_timeout_seconds

        context = playwright_mocks["context"]
        viewport = playwright_mocks["browser"].new_context.await_args.kwargs["viewport"]
        assert viewport == {"width": 1920, "height": 1080}
        context.set_default_navigation_timeout.assert_called_once_with(5000.0)
        context.close.assert_awaited_once()
        playwright_mocks["browser"].close.assert_awaited_once()
        playwright_mocks["playwright"].stop.assert_awaited_once()
        assert manager.browser is None
