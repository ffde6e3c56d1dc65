"""Tests for runtime settings, durations and the TOML config."""

import os
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from timeboxer.errors import ConfigError
from timeboxer.settings import (
    Config,
    RuntimeSettings,
    clear_settings_cache,
    format_duration,
    get_settings,
    load_config,
    parse_config,
    parse_duration,
)


class TestParseDuration:
    """Tests for duration parsing."""

    def test_parse_seconds(self):
        assert parse_duration("30s") == timedelta(seconds=30)

    def test_parse_minutes(self):
        assert parse_duration("15m") == timedelta(minutes=15)

    def test_parse_hours(self):
        assert parse_duration("2h") == timedelta(hours=2)

    def test_parse_days(self):
        assert parse_duration("1d") == timedelta(days=1)

    def test_parse_milliseconds(self):
        assert parse_duration("250ms") == timedelta(milliseconds=250)

    def test_parse_compound(self):
        assert parse_duration("1h30m") == timedelta(hours=1, minutes=30)
        assert parse_duration("1m5s") == timedelta(minutes=1, seconds=5)

    def test_parse_fraction(self):
        assert parse_duration("1.5h") == timedelta(minutes=90)

    def test_parse_zero(self):
        assert parse_duration("0") == timedelta(0)

    def test_parse_case_insensitive(self):
        assert parse_duration("1H") == timedelta(hours=1)

    @pytest.mark.parametrize("text", ["", "invalid", "10x", "5", "m5", "1h 30m"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError, match="invalid duration"):
            parse_duration(text)


class TestFormatDuration:
    def test_format(self):
        assert format_duration(timedelta(minutes=15)) == "15m"
        assert format_duration(timedelta(hours=1, minutes=30)) == "1h30m"
        assert format_duration(timedelta(seconds=90)) == "1m30s"
        assert format_duration(timedelta(milliseconds=1500)) == "1s500ms"
        assert format_duration(timedelta(0)) == "0s"

    def test_format_is_parseable(self):
        d = timedelta(hours=2, minutes=5, seconds=7)
        assert parse_duration(format_duration(d)) == d


class TestRuntimeSettings:
    def test_defaults(self):
        settings = RuntimeSettings()
        assert settings.tick_interval == 1.0
        assert settings.config_file is None
        assert settings.work_dir is None
        assert settings.log_level == "INFO"

    def test_environment_overrides(self):
        with patch.dict(
            os.environ,
            {"TIMEBOXER_TICK_INTERVAL": "0.5", "TIMEBOXER_LOG_LEVEL": "DEBUG"},
        ):
            settings = RuntimeSettings()
        assert settings.tick_interval == 0.5
        assert settings.log_level == "DEBUG"

    def test_tick_interval_must_be_positive(self):
        with patch.dict(os.environ, {"TIMEBOXER_TICK_INTERVAL": "0"}):
            with pytest.raises(ValueError):
                RuntimeSettings()

    def test_default_config_file_in_home(self):
        settings = RuntimeSettings()
        assert settings.resolved_config_file == Path.home() / ".timeboxer" / "timeboxer.toml"

    def test_xdg_config_home(self):
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": "/tmp/xdg_config"}):
            settings = RuntimeSettings()
            assert settings.config_dir == Path("/tmp/xdg_config/timeboxer")

    def test_explicit_config_file(self):
        with patch.dict(os.environ, {"TIMEBOXER_CONFIG_FILE": "/etc/tb.toml"}):
            settings = RuntimeSettings()
        assert settings.resolved_config_file == Path("/etc/tb.toml")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first


class TestConfig:
    """Tests for TOML config parsing."""

    def test_defaults(self):
        config = Config()
        assert config.wallpaper.enabled is False
        assert config.wallpaper.step == timedelta(minutes=1)
        assert config.wallpaper.interval == timedelta(minutes=15)
        assert config.wallpaper.foreground == ["#534B4D"]
        assert config.wallpaper.background == ["#9AC97C"]
        assert config.menu_bar.step == timedelta(minutes=5)
        assert config.announcement.step == timedelta(0)
        assert config.announcement.interval == timedelta(hours=1)
        assert config.announcement.voice == "Alex"

    def test_wallpaper_section(self):
        config = parse_config(
            """
[wallpaper]
enabled  = true
step     = "5m"
interval = "1h"
"""
        )
        assert config.wallpaper.enabled is True
        assert config.wallpaper.step == timedelta(minutes=5)
        assert config.wallpaper.interval == timedelta(hours=1)

    def test_colors_as_string_or_list(self):
        config = parse_config(
            """
[wallpaper]
foreground = "#102030"
background = ["#000000", "FFFFFF"]
times = ["08:00", "20:00"]
"""
        )
        assert config.wallpaper.foreground == ["#102030"]
        assert config.wallpaper.background == ["#000000", "FFFFFF"]
        assert config.wallpaper.times == ["08:00", "20:00"]

    def test_numeric_durations_are_seconds(self):
        config = parse_config("[menu_bar]\nstep = 60\ninterval = 900\n")
        assert config.menu_bar.step == timedelta(minutes=1)
        assert config.menu_bar.interval == timedelta(minutes=15)

    def test_work_dir(self):
        config = parse_config('work_dir = "/tmp/tb"\n')
        assert config.work_dir == "/tmp/tb"

    @pytest.mark.parametrize(
        "text",
        [
            '[wallpaper]\nstep = "nope"\n',
            '[menu_bar]\ninterval = "0"\n',
            '[menu_bar]\nstep = "20m"\ninterval = "15m"\n',
            '[wallpaper]\nforeground = "bad_color"\n',
            '[wallpaper]\nforeground = ["#000000", "#111111", "#222222"]\n',
            '[wallpaper]\ntimes = ["25:00"]\n',
            '[wallpaper]\ntimes = ["01:00", "02:00", "03:00"]\n',
            "[unknown]\nenabled = true\n",
            "[log]\ncolour = 1\n",
        ],
    )
    def test_invalid_values(self, text):
        with pytest.raises(ConfigError):
            parse_config(text)

    def test_times_out_of_order(self):
        with pytest.raises(ConfigError, match="times are out of order"):
            parse_config('[wallpaper]\ntimes = ["20:00", "08:00"]\n')

    def test_equal_times_allowed(self):
        config = parse_config('[wallpaper]\ntimes = ["08:00", "08:00"]\n')
        assert config.wallpaper.times == ["08:00", "08:00"]

    def test_syntax_error(self):
        with pytest.raises(ConfigError, match="cannot parse config"):
            parse_config("[wallpaper\n")


class TestLoadConfig:
    def test_load_from_path(self, tmp_path):
        path = tmp_path / "timeboxer.toml"
        path.write_text('[log]\nenabled = true\nstep = "30s"\ninterval = "5m"\n')

        config = load_config(path)

        assert config.log.enabled is True
        assert config.log.step == timedelta(seconds=30)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="config file not found"):
            load_config(tmp_path / "missing.toml")

    def test_default_path_from_settings(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[menu_bar]\nenabled = true\n")

        with patch.dict(os.environ, {"TIMEBOXER_CONFIG_FILE": str(path)}):
            clear_settings_cache()
            config = load_config()

        assert config.menu_bar.enabled is True

    def test_bad_toml_file(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("this is not toml")
        with pytest.raises(ConfigError, match="cannot parse config"):
            load_config(path)
