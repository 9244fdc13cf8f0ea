"""Notification and alerting ports."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class NotifierPort(Protocol):
    """Port for telling a submitter their document is ready.

    Implementations:
    - adapters/notification/sendgrid_notifier.py (SendGridNotifier)
    """

    def notify(self, recipient: str, filename: str, document: bytes) -> None:
        """Email ``document`` to ``recipient`` as an attachment.

        Raises:
            NotificationError: If the message cannot be sent.
        """
        ...


class AlertPort(Protocol):
    """Port for reporting failed runs to operators of the service.

    Implementations:
    - adapters/notification/logging_alerter.py (LoggingAlerter)
    """

    def alert(
        self,
        stage: str,
        error: Exception,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Report a failure.

        Args:
            stage: 'generation', 'validation' or 'notification'.
            error: The error that aborted the stage.
            context: Extra fields such as the storage location.
        """
        ...
