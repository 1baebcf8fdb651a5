"""Failure diagnostics: screenshot plus a JSON record per failed step."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page


class ErrorCapture:
    """Capture failure context for a workflow step."""

    def __init__(
        self,
        screenshots_dir: str = "test-output/screenshots",
        max_errors: int = 50,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize error capture.

        Args:
            screenshots_dir: Directory for screenshots and JSON records
            max_errors: Records kept in memory
            clock: Timestamp source, UTC ``datetime.now`` by default
        """
        self.screenshots_dir = Path(screenshots_dir)
        self.errors: List[Dict[str, Any]] = []
        self.max_errors = max_errors
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def capture(
        self, page: Page, error: Exception, context: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Capture a screenshot and write an error record next to it.

        Diagnostics problems are logged and recorded on the returned record;
        they never replace the error being reported.

        Args:
            page: Playwright page object
            error: Exception that failed the step
            context: Step name, session id, booking parameters...

        Returns:
            Error record
        """
        timestamp = self._clock()
        error_id = f"failed-{timestamp.strftime('%Y-%m-%d-%H-%M-%S-%f')}"

        error_record: Dict[str, Any] = {
            "id": error_id,
            "timestamp": timestamp.isoformat(),
            "error_type": type(error).__name__,
            "error_message": str(error),
            "context": context,
            "captures": {},
        }
        if hasattr(error, "to_dict"):
            error_record["error_details"] = error.to_dict()

        try:
            self.screenshots_dir.mkdir(parents=True, exist_ok=True)
            screenshot_path = self.screenshots_dir / f"{error_id}.jpg"
            await page.screenshot(path=str(screenshot_path), type="jpeg", full_page=True)
            error_record["captures"]["screenshot"] = str(screenshot_path)
            logger.info(f"Captured failure screenshot: {screenshot_path}")
        except (PlaywrightError, OSError) as e:
            logger.warning(f"Could not capture screenshot: {e}")
            error_record["capture_error"] = str(e)

        error_record["url"] = page.url

        try:
            json_path = self.screenshots_dir / f"{error_id}.json"
            json_path.write_text(
                json.dumps(error_record, indent=2, default=str), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Failed to write error record {error_id}: {e}")

        self.errors.append(error_record)
        if len(self.errors) > self.max_errors:
            self.errors.pop(0)

        return error_record
