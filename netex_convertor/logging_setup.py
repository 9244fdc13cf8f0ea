"""Console logging setup for the convertor entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import ObservabilityConfig, get_config

ROOT_LOGGER_NAME = "netex_convertor"


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Install a single stdout handler on the package logger.

    Existing handlers are removed so repeated calls (one per harness
    invocation) do not duplicate output.

    Args:
        config: Optional logging configuration override.

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(config.level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(config.level.upper())
    handler.setFormatter(logging.Formatter(config.format))

    if logger.hasHandlers():
        logger.handlers.clear()

    logger.addHandler(handler)
    return logger
