"""Tests for configuration settings."""

import pytest
from pydantic import ValidationError as SettingsValidationError

from staybot.core.config.settings import StayBotSettings, get_settings, reset_settings
from staybot.core.exceptions import ConfigurationError


class TestStayBotSettings:
    """Test settings defaults, validation and environment overrides."""

    def test_defaults(self):
        settings = StayBotSettings(_env_file=None)

        assert settings.search_location == "Tel Aviv"
        assert settings.search_adults == 2
        assert settings.search_children == 1
        assert settings.max_calendar_pages == 24
        assert settings.min_result_cards == 6
        assert settings.stepper_click_delay == 0.1
        assert settings.headless is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STAYBOT_SEARCH_LOCATION", "Haifa")
        monkeypatch.setenv("STAYBOT_SEARCH_ADULTS", "4")
        monkeypatch.setenv("STAYBOT_HEADLESS", "false")

        settings = StayBotSettings(_env_file=None)

        assert settings.search_location == "Haifa"
        assert settings.search_adults == 4
        assert settings.headless is False

    def test_log_level_normalized(self):
        assert StayBotSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(SettingsValidationError):
            StayBotSettings(_env_file=None, log_level="LOUD")

    def test_stepper_delay_bounds(self):
        with pytest.raises(SettingsValidationError):
            StayBotSettings(_env_file=None, stepper_click_delay=2.5)

    def test_poll_must_be_below_timeouts(self):
        with pytest.raises(SettingsValidationError):
            StayBotSettings(_env_file=None, wait_poll_seconds=5.0, probe_timeout_seconds=5.0)

    def test_reservation_path_must_be_absolute(self):
        with pytest.raises(SettingsValidationError):
            StayBotSettings(_env_file=None, reservation_path="book/stays")

    def test_wait_specs(self, settings):
        assert settings.wait_spec().timeout == 5.0
        assert settings.probe_spec().timeout == 1.0
        assert settings.probe_spec().poll_interval == 0.5

    def test_default_booking_parameters(self, settings):
        params = settings.default_booking_parameters()

        assert params.location == "Tel Aviv"
        assert params.checkin_iso == "2025-07-24"
        assert params.checkout_iso == "2025-07-27"
        assert (params.adults, params.children) == (2, 1)

    def test_default_booking_parameters_requires_dates(self):
        with pytest.raises(ConfigurationError):
            StayBotSettings(_env_file=None).default_booking_parameters()


class TestSettingsSingleton:
    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first
