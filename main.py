#!/usr/bin/env python3
"""
staybot - search, edit and reserve a stay in a real browser.

Main entry point for the application.
"""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError as SettingsValidationError

from staybot.core.config.settings import StayBotSettings
from staybot.core.exceptions import StayBotError
from staybot.core.logger import setup_logging
from staybot.services.booking.booking_workflow import SearchReserveWorkflow, WorkflowReport
from staybot.services.browser_manager import BrowserManager
from staybot.services.service_context import InteractionServiceFactory


async def run_workflow(settings: StayBotSettings) -> WorkflowReport:
    """
    Run the search-edit-reserve workflow once in a fresh browser.

    Args:
        settings: Validated settings

    Returns:
        Report of the completed run
    """
    params = settings.default_booking_parameters()
    context = InteractionServiceFactory.create(settings)
    workflow = SearchReserveWorkflow(context)

    async with BrowserManager(settings) as browser:
        session = await browser.new_session()
        return await workflow.run(session, params, settings.app_url)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="staybot - search, edit and reserve a stay",
        epilog="Every option falls back to its STAYBOT_* environment variable.",
    )
    parser.add_argument("--url", dest="app_url", help="Site base URL")
    parser.add_argument("--location", dest="search_location", help="Free-text location")
    parser.add_argument("--checkin", dest="search_checkin", help="Check-in date, M/D/YYYY")
    parser.add_argument("--checkout", dest="search_checkout", help="Check-out date, M/D/YYYY")
    parser.add_argument("--adults", dest="search_adults", type=int)
    parser.add_argument("--children", dest="search_children", type=int)
    parser.add_argument("--infants", dest="search_infants", type=int)
    parser.add_argument("--pets", dest="search_pets", type=int)
    parser.add_argument(
        "--headed", dest="headless", action="store_false", default=None, help="Show the browser"
    )
    parser.add_argument("--selectors", dest="selectors_file", help="Selectors YAML file")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--json-logs", dest="log_json", action="store_true", default=None, help="JSON log file"
    )
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    overrides: Dict[str, Any] = {k: v for k, v in vars(args).items() if v is not None}

    try:
        settings = StayBotSettings(**overrides)
    except SettingsValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    setup_logging(settings.log_level, json_format=settings.log_json)

    try:
        report = asyncio.run(run_workflow(settings))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 130
    except StayBotError as e:
        logger.error(f"Workflow failed: {e.message}")
        return 1

    logger.info(
        f"Reserved via {report.reservation_url} "
        f"({report.listings_collected} listings, dates shifted: {report.dates_shifted})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(cli())
