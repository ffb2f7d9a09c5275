"""
Goal: Set up loguru logging to stderr and a rolling log file under <QUICKSWITCH_HOME>/logs.
Keep output friendly and keep the API token out of the log files.
"""

import re
import sys
from pathlib import Path

from loguru import logger

from quickswitch.settings import LOG_DIR


def _sanitize_log_message(msg: str) -> str:
    """Remove sensitive information from log messages."""
    # Anything that looks like a token
    msg = re.sub(r'[A-Za-z0-9_-]{32,}', '[REDACTED]', msg)
    msg = re.sub(r'(token|secret)[\s=:]+[^\s]+', r'\1=[REDACTED]', msg, flags=re.IGNORECASE)
    return msg


def _filter_sensitive_logs(record) -> bool:
    """Filter out records that mention the API token."""
    message = record["message"].lower()
    return "x-qs-token" not in message and "token=" not in message


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    stderr = getattr(sys, "stderr", None)
    if stderr and hasattr(stderr, "write"):
        logger.add(
            lambda msg: stderr.write(_sanitize_log_message(msg)),
            colorize=False,
            level=level,
            backtrace=False,
            diagnose=False,
        )
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(Path(LOG_DIR) / "{time:YYYY-MM-DD}.log"),
            rotation="00:00",
            retention="14 days",
            level=level,
            backtrace=False,
            diagnose=False,
            serialize=False,
            enqueue=True,
            encoding="utf-8",
            filter=_filter_sensitive_logs,
        )
    except OSError:
        # Never let logging crash the agent
        logger.exception("Could not open log directory {}", LOG_DIR)
