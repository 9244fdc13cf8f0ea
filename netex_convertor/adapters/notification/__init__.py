"""Notification adapters - Implementations of the NotifierPort and AlertPort.

Available implementations:
- SendGridNotifier: Emails the validated document to the submitter
- LoggingAlerter: Reports failed stages as ERROR log records
"""

from .logging_alerter import LoggingAlerter
from .sendgrid_notifier import SendGridNotifier

__all__ = ["SendGridNotifier", "LoggingAlerter"]
