"""Tests for error capture."""

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from staybot.core.exceptions import WaitTimeoutError
from staybot.utils.error_capture import ErrorCapture
from tests.fakes import FakePage

FIXED_TIME = datetime(2025, 7, 24, 13, 5, 9, tzinfo=timezone.utc)


class TestErrorCapture:
    """Test error capture functionality."""

    @pytest.fixture
    def capture_dir(self, tmp_path):
        return tmp_path / "screenshots"

    def test_init(self, capture_dir):
        """Test ErrorCapture initialization."""
        ec = ErrorCapture(screenshots_dir=str(capture_dir))

        assert ec.screenshots_dir == capture_dir
        assert ec.errors == []
        assert ec.max_errors == 50

    @pytest.mark.asyncio
    async def test_capture_writes_screenshot_and_record(self, capture_dir):
        """Test screenshot and JSON record share the failure id."""
        ec = ErrorCapture(screenshots_dir=str(capture_dir), clock=lambda: FIXED_TIME)
        page = FakePage("https://www.example.com/rooms/1")
        error = WaitTimeoutError("'#reserve' to be clickable", 5.0, 5.0)

        record = await ec.capture(page, error, {"step": "reserve_and_validate"})

        assert record["id"] == "failed-2025-07-24-13-05-09-000000"
        assert record["error_type"] == "WaitTimeoutError"
        assert record["error_details"]["details"]["condition"] == "'#reserve' to be clickable"
        assert record["url"] == "https://www.example.com/rooms/1"

        screenshot = Path(record["captures"]["screenshot"])
        assert screenshot == capture_dir / "failed-2025-07-24-13-05-09-000000.jpg"
        assert screenshot.exists()

        saved = json.loads((capture_dir / "failed-2025-07-24-13-05-09-000000.json").read_text())
        assert saved["context"] == {"step": "reserve_and_validate"}
        assert saved["id"] == record["id"]

    @pytest.mark.asyncio
    async def test_plain_exception_has_no_details(self, capture_dir):
        ec = ErrorCapture(screenshots_dir=str(capture_dir), clock=lambda: FIXED_TIME)
        record = await ec.capture(FakePage(), RuntimeError("boom"), {})

        assert record["error_message"] == "boom"
        assert "error_details" not in record

    @pytest.mark.asyncio
    async def test_screenshot_failure_is_recorded(self, capture_dir):
        """Test a closed page does not hide the original error."""
        ec = ErrorCapture(screenshots_dir=str(capture_dir), clock=lambda: FIXED_TIME)
        page = MagicMock()
        page.url = "about:blank"
        page.screenshot = AsyncMock(side_effect=PlaywrightError("Target closed"))

        record = await ec.capture(page, RuntimeError("boom"), {"step": "search"})

        assert record["captures"] == {}
        assert record["capture_error"] == "Target closed"
        assert (capture_dir / f"{record['id']}.json").exists()

    @pytest.mark.asyncio
    async def test_max_errors_kept_in_memory(self, capture_dir):
        ec = ErrorCapture(screenshots_dir=str(capture_dir), max_errors=2)
        page = FakePage()

        for i in range(3):
            await ec.capture(page, RuntimeError(f"error {i}"), {})

        assert [e["error_message"] for e in ec.errors] == ["error 1", "error 2"]

    @pytest.mark.asyncio
    async def test_failures_within_one_second_keep_separate_files(self, capture_dir):
        times = iter([FIXED_TIME, FIXED_TIME.replace(microsecond=250000)])
        ec = ErrorCapture(screenshots_dir=str(capture_dir), clock=lambda: next(times))
        page = FakePage()

        first = await ec.capture(page, RuntimeError("first"), {})
        second = await ec.capture(page, RuntimeError("second"), {})

        assert first["id"] != second["id"]
        assert len(list(capture_dir.glob("*.json"))) == 2
        assert len(list(capture_dir.glob("*.jpg"))) == 2
