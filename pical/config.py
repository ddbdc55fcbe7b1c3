"""Configuration file loading and UTC offset parsing utilities."""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

from .constants import DEFAULT_CONFIG_FILES, DEFAULT_HORIZON_DAYS
from .exceptions import ConfigError
from .timezones import DEFAULT_ZONES, FixedZone, SeasonalZone, ZoneRule

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """
    Parser settings loaded from a config file.

    Attributes:
        offset: Target offset, or None to use the system's local offset
        horizon_days: Days after now that recurrences are expanded to
        zones: TZID table, the defaults plus any configured zones
    """

    offset: Optional[timezone] = None
    horizon_days: int = DEFAULT_HORIZON_DAYS
    zones: dict[str, ZoneRule] = field(default_factory=lambda: dict(DEFAULT_ZONES))


def find_default_config() -> Optional[str]:
    """
    Find a default configuration file.

    Searches in priority order:
    1. Current directory: ./pical.json
    2. User home directory: ~/.pical.json
    3. $XDG_CONFIG_HOME/pical/config.json, else ~/.config/pical/config.json

    Returns:
        Path to the first found config file, or None if none found
    """
    for name in DEFAULT_CONFIG_FILES:
        if os.path.isfile(name):
            return name

    home = Path.home()
    home_config = home / ".pical.json"
    if home_config.is_file():
        return str(home_config)

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    config_dir = Path(xdg_config) if xdg_config else home / ".config"
    config_file = config_dir / "pical" / "config.json"
    if config_file.is_file():
        return str(config_file)

    return None


def local_offset() -> timezone:
    """The system's current UTC offset as a fixed timezone."""
    offset = datetime.now().astimezone().utcoffset() or timedelta(0)
    return timezone(offset)


def parse_offset(tz_string: Optional[str]) -> Optional[timezone]:
    """
    Parse a UTC offset string into a fixed timezone.

    Supports:
    - "UTC", "GMT" or "Z"
    - "LOCAL" (the system's current offset)
    - Offset format: "+10:00", "-0800", etc.

    Args:
        tz_string: Offset string to parse

    Returns:
        Parsed timezone, or None if the string is empty or invalid
    """
    if not tz_string:
        return None
    s = tz_string.strip().upper()
    if s in ("UTC", "GMT", "Z"):
        return timezone.utc
    if s == "LOCAL":
        return local_offset()
    m = re.match(r"^([+-])(\d{2}):?(\d{2})$", s)
    if m and int(m[2]) < 24 and int(m[3]) < 60:
        sign = 1 if m[1] == "+" else -1
        return timezone(sign * timedelta(hours=int(m[2]), minutes=int(m[3])))
    logger.warning("Invalid UTC offset %r", tz_string)
    return None


def _require_offset(value: Any, where: str) -> timezone:
    offset = parse_offset(value) if isinstance(value, str) else None
    if offset is None:
        raise ConfigError(f"Invalid offset for {where}: {value!r}")
    return offset


def parse_zone(name: str, spec: Any) -> ZoneRule:
    """
    Build a zone rule from its config entry.

    A string is a fixed offset; an object with "standard" and "daylight"
    offsets (and optional "standard_months": [first, last]) is seasonal.

    Raises:
        ConfigError: If the entry is malformed
    """
    if isinstance(spec, str):
        return FixedZone(_require_offset(spec, name))
    if not isinstance(spec, dict):
        raise ConfigError(f"Zone '{name}' must be an offset string or an object")

    standard = _require_offset(spec.get("standard"), f"{name}.standard")
    daylight = _require_offset(spec.get("daylight"), f"{name}.daylight")
    months = spec.get("standard_months")
    if months is None:
        return SeasonalZone(standard, daylight)
    if (
        not isinstance(months, list)
        or len(months) != 2
        or not all(isinstance(m, int) and 1 <= m <= 12 for m in months)
    ):
        raise ConfigError(f"Zone '{name}' standard_months must be [first, last]")
    return SeasonalZone(standard, daylight, (months[0], months[1]))


def load_config(path: str) -> Settings:
    """
    Load parser settings from a JSON file.

    Expected JSON structure (every field optional):
    {
        "timezone": "+10:00",
        "horizon_days": 60,
        "zones": {
            "Australia/Perth": "+08:00",
            "Australia/Melbourne": {"standard": "+10:00", "daylight": "+11:00"}
        }
    }

    Args:
        path: Path to the JSON configuration file

    Returns:
        The loaded settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        PermissionError: If config file can't be read
        ConfigError: If config format is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)
    except (FileNotFoundError, PermissionError):
        raise
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON format: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}")

    if not isinstance(cfg, dict):
        raise ConfigError("Config file must contain a JSON object")

    settings = Settings()

    if cfg.get("timezone") is not None:
        settings.offset = _require_offset(cfg["timezone"], "timezone")

    try:
        settings.horizon_days = int(cfg.get("horizon_days", DEFAULT_HORIZON_DAYS))
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid 'horizon_days' value: {e}")
    if settings.horizon_days <= 0:
        raise ConfigError("'horizon_days' must be positive")

    zones = cfg.get("zones", {})
    if not isinstance(zones, dict):
        raise ConfigError("'zones' must be an object")
    for name, spec in zones.items():
        settings.zones[name] = parse_zone(name, spec)

    logger.debug("Loaded config %s with %d zone(s)", path, len(settings.zones))
    return settings
