"""Email an export as an attachment using the SMTP settings from the config."""
import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path

from utils.app_config import coerce_port

logger = logging.getLogger(__name__)


def build_message(
    path: str,
    recipients: list[str],
    sender: str,
    subject: str,
    body: str,
    mime_type: str,
) -> EmailMessage:
    """Single-attachment message; the attachment keeps the artifact's file name."""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = ", ".join(recipients)
    msg.set_content(body)

    maintype, _, subtype = mime_type.partition("/")
    with open(path, "rb") as f:
        msg.add_attachment(
            f.read(),
            maintype=maintype,
            subtype=subtype,
            filename=Path(path).name,
        )
    return msg


class SmtpMailComposer:
    def __init__(self, settings: dict):
        self._settings = settings
        self.port = coerce_port(settings.get("port"))

    def is_available(self) -> bool:
        return bool(self._settings.get("host"))

    def default_recipient(self) -> str | None:
        return self._settings.get("default_recipient") or None

    def send(self, msg: EmailMessage) -> None:
        s = self._settings
        with smtplib.SMTP(s["host"], self.port, timeout=30) as smtp:
            if s.get("use_tls", True):
                smtp.starttls()
            if s.get("username"):
                smtp.login(s["username"], s.get("password") or "")
            smtp.send_message(msg)
        logger.info("Export emailed to %s", msg["To"])

    @property
    def sender(self) -> str:
        return self._settings.get("sender") or self._settings.get("username") or ""
