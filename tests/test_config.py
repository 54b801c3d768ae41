"""Tests for settings loading and logging setup."""

import json

import pytest
import structlog

from speaking_placement.config import Settings, YamlSettingsSource, get_settings
from speaking_placement.logging_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.analysis_timeout_seconds == 2.0
        assert settings.audio_timeout_seconds == 5.0
        assert settings.fft_size == 2048
        assert settings.presence_band_low_hz == 2000
        assert settings.presence_band_high_hz == 8000
        assert not settings.json_logs

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PLACEMENT_ANALYSIS_TIMEOUT_SECONDS", "0.5")
        monkeypatch.setenv("PLACEMENT_LOG_FORMAT", "json")
        settings = Settings()
        assert settings.analysis_timeout_seconds == 0.5
        assert settings.json_logs

    def test_init_beats_env(self, monkeypatch):
        monkeypatch.setenv("PLACEMENT_AUDIO_TIMEOUT_SECONDS", "9")
        assert Settings(audio_timeout_seconds=1.5).audio_timeout_seconds == 1.5

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            Settings(analysis_timeout_seconds=0)

    def test_yaml_source_flattens_sections(self):
        values = YamlSettingsSource(Settings)()
        assert values["analysis_timeout_seconds"] == 2.0
        assert values["energy_window_ms"] == 100
        assert values["log_level"] == "INFO"

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(json_logs=True, level="INFO")
        structlog.get_logger().info("section_scored", section="A", score=71)
        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "section_scored"
        assert event["score"] == 71
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self, capsys):
        configure_logging(json_logs=True, level="warning")
        logger = structlog.get_logger()
        logger.info("hidden_event")
        logger.warning("shown_event")
        out = capsys.readouterr().out
        assert "hidden_event" not in out
        assert "shown_event" in out

    def test_unknown_level_defaults_to_info(self, capsys):
        configure_logging(json_logs=True, level="chatty")
        structlog.get_logger().debug("debug_event")
        structlog.get_logger().info("info_event")
        out = capsys.readouterr().out
        assert "debug_event" not in out
        assert "info_event" in out

    def test_defaults_from_settings(self, capsys):
        configure_logging()
        structlog.get_logger().info("console_event")
        assert "console_event" in capsys.readouterr().out
