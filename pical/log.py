"""
Central logging configuration for pical.

Library modules only create loggers; applications (and the pical CLI) call
configure_logging() once to attach a handler and pick levels.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"

PICAL_MODULES = [
    "pical",
    "pical.components",
    "pical.properties",
    "pical.timezones",
    "pical.rrule",
    "pical.expander",
    "pical.parser",
    "pical.config",
]


def configure_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for pical.

    Args:
        debug_mode: Whether to enable debug logging for pical modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        PICAL_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        PICAL_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("PICAL_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("PICAL_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.WARNING
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if the application hasn't set one up already
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    module_level = logging.DEBUG if final_debug else root_level
    for module in PICAL_MODULES:
        logging.getLogger(module).setLevel(module_level)

    if final_debug:
        root_logger.debug("Debug logging enabled for pical modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in PICAL_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
