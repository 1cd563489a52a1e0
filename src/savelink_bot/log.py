"""Logging configuration with Rich formatting.

setup_logging() configures the root logger once at startup, taking its level
from Settings when they loaded; get_logger() hands out module loggers.
"""

import logging
from typing import Optional, TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Settings

DEFAULT_LEVEL = "INFO"

# Slack's Socket Mode client logs every ping; mlflow and httpx log each request
NOISY_LOGGERS = ("httpx", "httpcore", "slack_bolt", "slack_sdk", "mlflow")

def setup_logging(settings: Optional["Settings"] = None) -> None:
    """
    Without settings (startup failed before they loaded) the level is INFO,
    so configuration errors still get printed.
    """
    level = settings.LOG_LEVEL.upper() if settings else DEFAULT_LEVEL
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)]
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"savelink_bot.{name}")
