"""Alerting through the standard logging system."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass
class LoggingAlerter:
    """Reports failures as structured ERROR records.

    Implements AlertPort.

    Attributes:
        logger_name: Name of the logger the alerts are written to
    """

    logger_name: str = "netex_convertor.alerts"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(self.logger_name)

    def alert(
        self,
        stage: str,
        error: Exception,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._logger.error(
            "%s stage failed: %s",
            stage.capitalize(),
            error,
            extra={
                "stage": stage,
                "error_type": type(error).__name__,
                **dict(context or {}),
            },
        )
