"""Tests for settings, logging setup and the mode table."""

import pytest
import structlog
from pydantic import ValidationError
from py_climzone.config.logging import configure_logging
from py_climzone.config.scenario_modes import (
    MODE_PROFILES, MorphDirection, ScenarioMode, ZoneGeometry, get_mode_profile, list_modes
)
from py_climzone.config.settings import Settings


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CLIMZONE_LOG_LEVEL", raising=False)
        config = Settings()
        assert config.log_level == "INFO"
        assert config.log_format == "json"
        assert config.zone_cache_size == 128

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CLIMZONE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CLIMZONE_TIMELINE_END_YEAR", "2100")
        config = Settings()
        assert config.log_level == "DEBUG"
        assert config.timeline_end_year == 2100

    def test_invalid_timeline(self):
        with pytest.raises(ValidationError):
            Settings(timeline_start_year=2050, timeline_end_year=2030)

    def test_invalid_format(self):
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_invalid_cache_size(self):
        with pytest.raises(ValidationError):
            Settings(zone_cache_size=0)


class TestConfigureLogging:
    """Test structlog configuration."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    @pytest.mark.parametrize("log_format", ["json", "plain"])
    def test_configure(self, log_format):
        configure_logging(Settings(log_format=log_format, log_level="debug"))
        assert structlog.is_configured()
        structlog.get_logger("py_climzone.test").info("Logging configured", fmt=log_format)


class TestScenarioModes:
    """Test the mode lookup table."""

    def test_parse(self):
        assert ScenarioMode.parse("Coastal") is ScenarioMode.COASTAL
        assert ScenarioMode.parse(ScenarioMode.FLOOD) is ScenarioMode.FLOOD
        assert ScenarioMode.parse("volcano") is None
        assert ScenarioMode.parse(None) is None

    def test_every_mode_has_profile(self):
        assert set(MODE_PROFILES) == set(ScenarioMode)
        assert list_modes() == ["agriculture", "coastal", "flood", "portfolio"]

    def test_policies(self):
        assert get_mode_profile("agriculture").morph.direction is MorphDirection.SHRINK
        assert get_mode_profile("flood").morph.direction is MorphDirection.EXPAND
        assert get_mode_profile("portfolio").morph is None
        assert get_mode_profile("volcano") is None

    def test_geometry_validation(self):
        with pytest.raises(ValueError):
            ZoneGeometry(base_radius_km=5, irregularity=0.2, vertex_count=2)
        with pytest.raises(ValueError):
            ZoneGeometry(base_radius_km=5, irregularity=1.5, vertex_count=12)
