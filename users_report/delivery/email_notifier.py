import logging
import smtplib
from email.message import EmailMessage
from typing import Dict, Any, Optional, Sequence

from ..config import MAX_RECIPIENTS
from ..exceptions import NotificationError
from ..models.report import StoredArtifact

logger = logging.getLogger(__name__)


class EmailNotifier:
    """
    Sends the report email over SMTP.

    Attributes:
        host (str): SMTP server host name.
        port (int): SMTP server port.
        username (Optional[str]): Login user, if the server needs authentication.
        password (Optional[str]): Login password.
        use_tls (bool): Upgrade the connection with STARTTLS.
        timeout (int): Socket timeout in seconds.
    """

    def __init__(self, host: str = 'localhost', port: int = 587, username: Optional[str] = None,
                 password: Optional[str] = None, use_tls: bool = True, timeout: int = 60):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_config(cls, smtp_config: Dict[str, Any]) -> 'EmailNotifier':
        return cls(
            host=smtp_config.get('host', 'localhost'),
            port=int(smtp_config.get('port', 587)),
            username=smtp_config.get('username'),
            password=smtp_config.get('password'),
            use_tls=smtp_config.get('use_tls', True),
        )

    def build_message(self, author: str, recipients: Sequence[str], reply_to: str, subject: str,
                      html_body: str, attachments: Sequence[StoredArtifact] = ()) -> EmailMessage:
        """
        Build the email with the HTML body and the stored report files attached.

        Raises:
            NotificationError: If there are no recipients or more than allowed.
        """
        recipients = list(recipients)
        if not recipients:
            raise NotificationError("No recipients given")
        if len(recipients) > MAX_RECIPIENTS:
            raise NotificationError(f"At most {MAX_RECIPIENTS} recipients are allowed, got {len(recipients)}")

        message = EmailMessage()
        message['From'] = author
        message['To'] = ', '.join(recipients)
        message['Reply-To'] = reply_to
        message['Subject'] = subject
        message.set_content("This report is best viewed in an HTML capable email client.")
        message.add_alternative(html_body, subtype='html')

        for artifact in attachments:
            maintype, _, subtype = artifact.mime_type.partition('/')
            message.add_attachment(
                artifact.contents.encode('utf-8'),
                maintype=maintype or 'application',
                subtype=subtype or 'octet-stream',
                filename=artifact.file_name,
            )
        return message

    def send_email(self, author: str, recipients: Sequence[str], reply_to: str, subject: str,
                   html_body: str, attachments: Sequence[StoredArtifact] = ()) -> bool:
        """
        Send the report email. Failures are logged, never raised.

        Returns:
            bool: True if the server accepted the message.
        """
        try:
            message = self.build_message(author, recipients, reply_to, subject, html_body, attachments)
            self._send(message)
        except NotificationError as e:
            logger.error(f"Report email not sent: {e}")
            return False
        except Exception as e:
            logger.exception(f"Report email not sent, unexpected error: {str(e)}")
            return False

        logger.info(f"Report email sent to {', '.join(recipients)}")
        return True

    def _send(self, message: EmailMessage) -> None:
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or '')
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP delivery via {self.host}:{self.port} failed: {e}") from e
