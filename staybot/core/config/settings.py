"""Application settings with Pydantic validation."""

from typing import TYPE_CHECKING, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from staybot.constants import (
    Calendar,
    Delays,
    Endpoints,
    Intervals,
    QueryParams,
    Results,
    Retries,
    Timeouts,
)
from staybot.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from staybot.models import BookingParameters, WaitSpec


class StayBotSettings(BaseSettings):
    """Workflow settings with validation and environment variable support.

    Every field can be overridden with a ``STAYBOT_``-prefixed environment
    variable, e.g. ``STAYBOT_SEARCH_LOCATION=Haifa``.
    """

    # Target site
    app_url: str = Field(default="https://www.airbnb.com", description="Base URL of the site")

    # Default search parameters (US "M/D/YYYY" dates)
    search_location: str = Field(default="Tel Aviv", description="Free-text location")
    search_checkin: Optional[str] = Field(default=None, description="Check-in date, M/D/YYYY")
    search_checkout: Optional[str] = Field(default=None, description="Check-out date, M/D/YYYY")
    search_adults: int = Field(default=2, ge=0)
    search_children: int = Field(default=1, ge=0)
    search_infants: int = Field(default=0, ge=0)
    search_pets: int = Field(default=0, ge=0)

    # Synchronization
    wait_timeout_seconds: float = Field(default=Timeouts.WAIT, gt=0)
    wait_poll_seconds: float = Field(default=Intervals.POLL, gt=0)
    probe_timeout_seconds: float = Field(
        default=Timeouts.PROBE, gt=0, description="Budget for expected-negative checks"
    )
    navigation_timeout_seconds: float = Field(default=Timeouts.NAVIGATION, gt=0)

    # Interaction tuning
    stepper_click_delay: float = Field(
        default=Delays.STEPPER_CLICK,
        ge=0,
        le=Delays.STEPPER_CLICK_MAX,
        description="Fixed pause between stepper clicks (UI debounce)",
    )
    stale_retry_attempts: int = Field(default=Retries.MAX_SET_TEXT, ge=1, le=10)
    stale_retry_delay: float = Field(default=Delays.STALE_RETRY, ge=0, le=5)
    max_calendar_pages: int = Field(default=Calendar.MAX_FORWARD_PAGES, ge=1)
    min_result_cards: int = Field(default=Results.MIN_CARDS, ge=1)

    # URL codec parameter names (decode and replace sets are independent)
    decode_checkin_param: str = Field(default=QueryParams.DECODE_CHECKIN)
    decode_checkout_param: str = Field(default=QueryParams.DECODE_CHECKOUT)
    replace_checkin_param: str = Field(default=QueryParams.REPLACE_CHECKIN)
    replace_checkout_param: str = Field(default=QueryParams.REPLACE_CHECKOUT)
    reservation_path: str = Field(default=Endpoints.RESERVATION)

    # Locators
    selectors_file: str = Field(default="config/selectors.yaml")

    # Browser session
    headless: bool = Field(default=True)
    window_width: int = Field(default=1920, ge=320)
    window_height: int = Field(default=1080, ge=240)
    block_images: bool = Field(default=True)

    # Diagnostics
    screenshots_dir: str = Field(default="test-output/screenshots")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="STAYBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return upper

    @field_validator("reservation_path")
    @classmethod
    def validate_reservation_path(cls, v: str) -> str:
        """Reservation prefix must be an absolute path."""
        if not v.startswith("/"):
            raise ValueError("reservation_path must start with '/'")
        return v

    @model_validator(mode="after")
    def validate_poll_below_timeout(self) -> "StayBotSettings":
        """Poll interval must be strictly shorter than every wait budget."""
        if self.wait_poll_seconds >= min(self.wait_timeout_seconds, self.probe_timeout_seconds):
            raise ValueError("wait_poll_seconds must be shorter than wait and probe timeouts")
        return self

    def wait_spec(self) -> "WaitSpec":
        """Default budget for element and page waits."""
        from staybot.models import WaitSpec

        return WaitSpec(timeout=self.wait_timeout_seconds, poll_interval=self.wait_poll_seconds)

    def probe_spec(self) -> "WaitSpec":
        """Short budget for checks whose negative outcome is expected."""
        from staybot.models import WaitSpec

        return WaitSpec(timeout=self.probe_timeout_seconds, poll_interval=self.wait_poll_seconds)

    def default_booking_parameters(self) -> "BookingParameters":
        """
        Build the workflow's starting parameters from configuration.

        Raises:
            ConfigurationError: If check-in or check-out dates are not configured
        """
        from staybot.models import BookingParameters

        if not self.search_checkin or not self.search_checkout:
            raise ConfigurationError(
                "STAYBOT_SEARCH_CHECKIN and STAYBOT_SEARCH_CHECKOUT must be set (M/D/YYYY)",
                details={"checkin": self.search_checkin, "checkout": self.search_checkout},
            )
        return BookingParameters.from_us_dates(
            location=self.search_location,
            checkin=self.search_checkin,
            checkout=self.search_checkout,
            adults=self.search_adults,
            children=self.search_children,
            infants=self.search_infants,
            pets=self.search_pets,
        )


_settings: Optional[StayBotSettings] = None


def get_settings() -> StayBotSettings:
    """
    Get application settings singleton.

    Returns:
        StayBotSettings instance
    """
    global _settings
    if _settings is None:
        _settings = StayBotSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
