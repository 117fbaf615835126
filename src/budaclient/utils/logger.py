"""Centralized logging configuration."""

import logging
import sys
from datetime import datetime

from .config import Config


class MicrosecondFormatter(logging.Formatter):
    """Formatter with microsecond precision in timestamps.

    Example output:
        2024-01-15 14:23:45.123456 - buda - INFO - [rest.py:71:connect] - REST client connected to https://www.buda.com/api/v2
    """

    def formatTime(self, record, datefmt=None):
        """Override formatTime to include microseconds."""
        ct = datetime.fromtimestamp(record.created)
        s = ct.strftime(datefmt or "%Y-%m-%d %H:%M:%S")
        return f"{s}.{int(record.created % 1 * 1_000_000):06d}"


def setup_logger(name: str = "buda") -> logging.Logger:
    """Set up and return a configured logger."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = MicrosecondFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d:%(funcName)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

    return logger


logger = setup_logger()
