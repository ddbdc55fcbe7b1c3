import pytest
import json
from datetime import datetime, timezone, timedelta
from pical.config import (
    Settings,
    find_default_config,
    load_config,
    local_offset,
    parse_offset,
    parse_zone,
)
from pical.exceptions import ConfigError
from pical.timezones import DEFAULT_ZONES, FixedZone, SeasonalZone, hours


class TestParseOffset:
    def test_parse_utc(self):
        assert parse_offset("UTC") == timezone.utc
        assert parse_offset("gmt") == timezone.utc
        assert parse_offset("Z") == timezone.utc

    def test_parse_positive_offset(self):
        tz = parse_offset("+05:30")
        expected = timezone(timedelta(hours=5, minutes=30))
        assert tz == expected

    def test_parse_negative_offset(self):
        tz = parse_offset("-08:00")
        expected = timezone(timedelta(hours=-8))
        assert tz == expected

    def test_parse_compact_offset(self):
        assert parse_offset("+1000") == hours(10)

    def test_parse_local(self):
        tz = parse_offset("LOCAL")
        assert tz == local_offset()
        assert tz.utcoffset(None) == datetime.now().astimezone().utcoffset()

    def test_parse_zero_offset(self):
        tz = parse_offset("+00:00")
        assert tz == timezone.utc

    @pytest.mark.parametrize("value", ["", None, "Australia/Sydney", "+25:00", "+10:75"])
    def test_parse_invalid(self, value):
        assert parse_offset(value) is None


class TestParseZone:
    def test_fixed(self):
        assert parse_zone("Australia/Perth", "+08:00") == FixedZone(hours(8))

    def test_seasonal(self):
        rule = parse_zone(
            "Australia/Melbourne", {"standard": "+10:00", "daylight": "+11:00"}
        )

        assert rule == SeasonalZone(hours(10), hours(11))

    def test_seasonal_with_window(self):
        rule = parse_zone(
            "Test/Zone",
            {"standard": "+01:00", "daylight": "+02:00", "standard_months": [11, 2]},
        )

        assert rule.standard_months == (11, 2)

    @pytest.mark.parametrize(
        "spec",
        [
            "Perth",
            42,
            {"standard": "+10:00"},
            {"standard": "+10:00", "daylight": "+11:00", "standard_months": [4]},
            {"standard": "+10:00", "daylight": "+11:00", "standard_months": [0, 13]},
        ],
    )
    def test_invalid(self, spec):
        with pytest.raises(ConfigError):
            parse_zone("Bad/Zone", spec)


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_data = {
            "timezone": "+10:00",
            "horizon_days": 30,
            "zones": {"Australia/Perth": "+08:00"},
        }
        config_file.write_text(json.dumps(config_data))

        settings = load_config(str(config_file))

        assert settings.offset == hours(10)
        assert settings.horizon_days == 30
        assert settings.zones["Australia/Perth"] == FixedZone(hours(8))
        assert settings.zones["Australia/Sydney"] == DEFAULT_ZONES["Australia/Sydney"]

    def test_load_config_with_defaults(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")

        settings = load_config(str(config_file))

        assert settings == Settings()
        assert settings.offset is None
        assert settings.horizon_days == 60

    def test_defaults_not_shared(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"zones": {"A/B": "+01:00"}}))

        load_config(str(config_file))

        assert "A/B" not in DEFAULT_ZONES
        assert "A/B" not in Settings().zones

    def test_load_config_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_load_config_invalid_json(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(str(config_file))

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"timezone": "Somewhere"},
            {"horizon_days": "many"},
            {"horizon_days": 0},
            {"zones": ["Australia/Perth"]},
            {"zones": {"Australia/Perth": "west"}},
        ],
    )
    def test_load_config_invalid(self, tmp_path, data):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(data))

        with pytest.raises(ConfigError):
            load_config(str(config_file))


class TestFindDefaultConfig:
    def test_current_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pical.json").write_text("{}")

        assert find_default_config() == "pical.json"

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        config = tmp_path / "xdg" / "pical" / "config.json"
        config.parent.mkdir(parents=True)
        config.write_text("{}")

        assert find_default_config() == str(config)

    def test_home_file(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".pical.json").write_text("{}")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(home))

        assert find_default_config() == str(home / ".pical.json")

    def test_none_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert find_default_config() is None
