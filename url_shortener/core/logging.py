"""Logging configuration for URL shortener."""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Optional

ENV_LOCAL = "local"
ENV_DEV = "dev"
ENV_PROD = "prod"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request being handled."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _level_for(env: str) -> int:
    if env in (ENV_LOCAL, ENV_DEV):
        return logging.DEBUG
    # Unknown environments get production settings
    return logging.INFO


def setup_logging(env: str = ENV_LOCAL, level: Optional[str] = None) -> logging.Logger:
    """Setup logging configuration.

    Args:
        env: Deployment environment (local, dev, prod)
        level: Optional level name overriding the environment default

    Returns:
        Configured package logger
    """
    numeric_level = getattr(logging, level.upper(), None) if level else None
    if not isinstance(numeric_level, int):
        numeric_level = _level_for(env)

    if env == ENV_LOCAL:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = JsonFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())

    logger = logging.getLogger("url_shortener")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    return logger
