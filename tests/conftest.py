"""Pytest configuration and common fixtures."""

import os
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Try to load test-specific environment file if it exists
test_env_file = Path(__file__).parent / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file)

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from loguru import logger

from staybot.core.config.settings import StayBotSettings, reset_settings
from staybot.models import WaitSpec
from staybot.resilience.actions import ResilientActionExecutor
from staybot.resilience.synchronization import SynchronizationEngine
from staybot.services.service_context import InteractionServiceFactory
from staybot.services.session import SessionContext
from staybot.utils.selectors import LocatorRegistry
from tests.fakes import FakeClock, FakePage


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Isolate every test from STAYBOT_* variables in the developer's shell."""
    for key in list(os.environ):
        if key.startswith("STAYBOT_") and key != "STAYBOT_E2E":
            monkeypatch.delenv(key, raising=False)

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def log_messages() -> List[str]:
    """Collect loguru messages (WARNING and above) emitted during the test."""
    messages: List[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def page() -> FakePage:
    return FakePage("https://www.example.com/s/Tel-Aviv/homes")


@pytest.fixture
def session(page) -> SessionContext:
    return SessionContext(page, session_id="test-session")


@pytest.fixture
def registry() -> LocatorRegistry:
    """Built-in locators only."""
    return LocatorRegistry()


@pytest.fixture
def engine(clock) -> SynchronizationEngine:
    return SynchronizationEngine(
        WaitSpec(timeout=5.0, poll_interval=0.5),
        WaitSpec(timeout=1.0, poll_interval=0.5),
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.fixture
def executor(engine, clock) -> ResilientActionExecutor:
    return ResilientActionExecutor(
        engine,
        stale_retry_attempts=2,
        stale_retry_delay=0.0,
        stepper_click_delay=0.1,
        sleep=clock.sleep,
    )


@pytest.fixture
def settings(tmp_path) -> StayBotSettings:
    """Settings with short budgets and a temporary screenshot directory."""
    return StayBotSettings(
        _env_file=None,
        app_url="https://www.example.com",
        search_location="Tel Aviv",
        search_checkin="7/24/2025",
        search_checkout="7/27/2025",
        search_adults=2,
        search_children=1,
        wait_timeout_seconds=5.0,
        wait_poll_seconds=0.5,
        probe_timeout_seconds=1.0,
        navigation_timeout_seconds=5.0,
        stale_retry_delay=0.0,
        screenshots_dir=str(tmp_path / "screenshots"),
        selectors_file=str(tmp_path / "missing-selectors.yaml"),
    )


@pytest.fixture
def interaction_context(settings, registry, clock):
    return InteractionServiceFactory.create(
        settings, registry=registry, clock=clock, sleep=clock.sleep
    )
