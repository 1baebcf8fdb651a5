"""Tests for the synchronization engine and wait conditions."""

import pytest
from playwright.async_api import Error as PlaywrightError

from staybot.core.exceptions import WaitTimeoutError
from staybot.models import WaitSpec
from staybot.resilience.conditions import (
    CountAtLeast,
    CustomPredicate,
    ElementClickable,
    ElementVisible,
    PageReady,
)
from tests.fakes import FakeElement, stale_error


class TestWait:
    """Test polling behavior against a fake clock."""

    @pytest.mark.asyncio
    async def test_returns_immediately_when_true(self, engine, session, page, clock):
        element = page.add("#ready")

        result = await engine.wait(session, ElementVisible("#ready"))

        assert await result.inner_text() == element.text
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_returns_on_first_poll_after_condition_holds(self, engine, session, clock):
        """Condition true from t=1.2 with poll 0.5 is observed at t=1.5."""
        condition = CustomPredicate(lambda page: clock.now >= 1.2 and "ok", "t >= 1.2")

        result = await engine.wait(session, condition)

        assert result == "ok"
        assert clock.now == pytest.approx(1.5)

    @pytest.mark.asyncio
    async def test_timeout_bounded_by_one_poll(self, engine, session, clock):
        with pytest.raises(WaitTimeoutError) as exc_info:
            await engine.wait(session, ElementVisible("#never"))

        error = exc_info.value
        assert error.timeout == 5.0
        assert 5.0 <= error.elapsed <= 5.0 + 0.5
        assert "#never" in error.condition
        assert all(s <= 0.5 for s in clock.sleeps)

    @pytest.mark.asyncio
    async def test_last_sleep_clipped_to_deadline(self, engine, session, clock):
        spec = WaitSpec(timeout=1.25, poll_interval=0.5)

        with pytest.raises(WaitTimeoutError) as exc_info:
            await engine.wait(session, ElementVisible("#never"), spec)

        assert clock.sleeps == [0.5, 0.5, 0.25]
        assert exc_info.value.elapsed == 1.25

    @pytest.mark.asyncio
    async def test_driver_errors_count_as_not_yet(self, engine, session, page):
        element = page.add("#flaky")
        element.probe_errors = [stale_error(), stale_error()]

        result = await engine.wait(session, ElementVisible("#flaky"))

        assert result is not None
        assert element.probe_errors == []

    @pytest.mark.asyncio
    async def test_last_driver_error_reported(self, engine, session):
        def broken(page):
            raise PlaywrightError("Target closed")

        with pytest.raises(WaitTimeoutError) as exc_info:
            await engine.wait(session, CustomPredicate(broken, "broken"))

        assert exc_info.value.last_error == "Target closed"

    @pytest.mark.asyncio
    async def test_non_driver_errors_propagate(self, engine, session):
        def buggy(page):
            raise KeyError("bug")

        with pytest.raises(KeyError):
            await engine.wait(session, CustomPredicate(buggy, "buggy"))


class TestCheck:
    @pytest.mark.asyncio
    async def test_check_success(self, engine, session, page):
        page.add("#banner")
        result = await engine.check(session, ElementVisible("#banner"))
        assert result.is_success()

    @pytest.mark.asyncio
    async def test_check_failure_uses_probe_budget(self, engine, session, clock):
        result = await engine.check(session, ElementVisible("#banner"))

        assert result.is_failure()
        assert result.error_kind == "WaitTimeoutError"
        assert result.exception.timeout == 1.0
        assert clock.now == pytest.approx(1.0)


class TestConditions:
    @pytest.mark.asyncio
    async def test_clickable_requires_enabled(self, engine, session, page):
        page.add("#btn", enabled=False)
        result = await engine.check(session, ElementClickable("#btn"))
        assert result.is_failure()

    @pytest.mark.asyncio
    async def test_hidden_element_not_visible(self, engine, session, page):
        page.add("#hidden", visible=False)
        result = await engine.check(session, ElementVisible("#hidden"))
        assert result.is_failure()

    @pytest.mark.asyncio
    async def test_count_at_least(self, engine, session, page):
        page.set(".card", *[FakeElement(f"card {i}") for i in range(3)])

        locator = await engine.wait(session, CountAtLeast(".card", 3))
        assert await locator.count() == 3

        result = await engine.check(session, CountAtLeast(".card", 4))
        assert result.is_failure()

    def test_count_at_least_rejects_zero(self):
        with pytest.raises(ValueError):
            CountAtLeast(".card", 0)

    @pytest.mark.asyncio
    async def test_page_ready(self, engine, session, page):
        page.ready_state = "loading"
        assert (await engine.check(session, PageReady())).is_failure()

        page.ready_state = "complete"
        assert await engine.wait(session, PageReady()) is page

    @pytest.mark.asyncio
    async def test_async_predicate(self, engine, session):
        async def predicate(page):
            return page.url

        assert await engine.wait(session, CustomPredicate(predicate, "url")) == session.current_url

    def test_describe(self):
        assert "#a" in repr(ElementVisible("#a"))
        assert CustomPredicate(lambda p: True, "custom").describe() == "custom"
