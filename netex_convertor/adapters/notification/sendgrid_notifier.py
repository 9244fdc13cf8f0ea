"""SendGrid email notifier.

Sends the validated document to the submitter as an XML attachment.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Attachment, Disposition, FileContent, FileName, FileType, Mail

from ...config import EmailConfig, get_config
from ...domain.errors import ConfigurationError, NotificationError

_ACCEPTED_STATUS = (200, 201, 202)


@dataclass
class SendGridNotifier:
    """Emails generated documents through the SendGrid API.

    Implements NotifierPort.

    Attributes:
        config: Email configuration (API key, sender, subject)
        client: Optional pre-built API client (tests inject a mock)
    """

    config: EmailConfig = field(default_factory=lambda: get_config().email)
    client: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_client(self) -> Any:
        if self.client is None:
            if not self.config.sendgrid_api_key:
                raise ConfigurationError(
                    "SendGrid API key is not set",
                    setting_name="NETEX_EMAIL_SENDGRID_API_KEY",
                    expected_type="str",
                )
            self.client = SendGridAPIClient(api_key=self.config.sendgrid_api_key)
        return self.client

    def build_message(self, recipient: str, filename: str, document: bytes) -> Mail:
        message = Mail(
            from_email=self.config.sender,
            to_emails=recipient,
            subject=self.config.subject,
            html_content=(
                "<p>Hi there,</p>"
                f"<p>Your fares data has been converted and validated. "
                f"The NeTEx file <strong>{filename}</strong> is attached.</p>"
            ),
        )
        message.attachment = Attachment(
            FileContent(base64.b64encode(document).decode()),
            FileName(filename),
            FileType(self.config.attachment_type),
            Disposition("attachment"),
        )
        return message

    def notify(self, recipient: str, filename: str, document: bytes) -> None:
        message = self.build_message(recipient, filename, document)
        try:
            response = self._get_client().send(message)
        except (HTTPError, OSError) as e:
            raise NotificationError(
                f"Failed to send email to {recipient}",
                recipient=recipient,
                cause=e,
            )

        if response.status_code not in _ACCEPTED_STATUS:
            raise NotificationError(
                f"SendGrid API error: {response.status_code}",
                recipient=recipient,
            )
        self._logger.info(
            "Email sent",
            extra={"recipient": recipient, "attachment": filename},
        )
