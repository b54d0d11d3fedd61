"""Logging setup for the application entry point."""
import logging
import os

LOG_LEVEL_ENV = "STREAMEO_LOG_LEVEL"


def log_level_from_env(default: int = logging.INFO) -> int:
    """Level named by STREAMEO_LOG_LEVEL, or the default when unset or unknown."""
    level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "").strip().upper())
    return level if isinstance(level, int) else default


def configure_logging():
    logging.basicConfig(
        level=log_level_from_env(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
