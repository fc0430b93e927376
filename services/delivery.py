"""The only place the export pipeline touches the outside world.

Every method returns an ExportResult. Nothing raises out of this class:
unavailable share/email capabilities are reported with their own
ErrorKind so the caller can tell them apart from plain I/O failures.
"""
import logging
import smtplib
from pathlib import Path
from datetime import datetime
from typing import Callable, Optional, Protocol

from models.export_result import ErrorKind, ExportResult
from services.mail_composer import build_message
from utils.constants import (
    DEFAULT_DISPLAY_DATE_FORMAT,
    EMAIL_BODY_TEMPLATE,
    EMAIL_SUBJECT,
    MIME_TYPES,
    SHARE_DIALOG_TITLE,
)
from utils.date_helpers import format_display_date, utc_now

logger = logging.getLogger(__name__)

WRITE_FAILED_MSG = "Failed to export data"
SHARE_UNAVAILABLE_MSG = "Sharing not available on this device"
SHARE_FAILED_MSG = "Failed to share file"
SHARE_CANCELLED_MSG = "Sharing was cancelled"
EMAIL_UNAVAILABLE_MSG = "Email not available on this device"
EMAIL_NO_RECIPIENT_MSG = "No email recipient was given"
EMAIL_FAILED_MSG = "Failed to send email"


class ShareCapability(Protocol):
    def is_available(self) -> bool: ...

    def share(self, path: str, mime_type: str, dialog_title: str) -> bool: ...


class MailComposer(Protocol):
    sender: str

    def is_available(self) -> bool: ...

    def default_recipient(self) -> Optional[str]: ...

    def send(self, msg) -> None: ...


def mime_type_for(path: str) -> str:
    return MIME_TYPES["csv"] if str(path).lower().endswith(".csv") else MIME_TYPES["json"]


class DeliveryAdapter:
    def __init__(
        self,
        export_dir: str | Path,
        share_capability: Optional[ShareCapability] = None,
        mail_composer: Optional[MailComposer] = None,
        date_format: str = DEFAULT_DISPLAY_DATE_FORMAT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._export_dir = Path(export_dir)
        self._share = share_capability
        self._mail = mail_composer
        self._date_format = date_format
        self._clock = clock

    def resolve(self, path: str | Path) -> Path:
        """Relative names land in the export folder."""
        p = Path(path)
        return p if p.is_absolute() else self._export_dir / p

    def write(self, path: str | Path, content: str) -> ExportResult:
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8", newline="")
        except OSError:
            logger.error("Could not write export to %s", target, exc_info=True)
            return ExportResult.failed(ErrorKind.WRITE_FAILED, WRITE_FAILED_MSG)
        logger.info("Export file created: %s", target)
        return ExportResult.ok(str(target))

    def share(self, path: str | Path) -> ExportResult:
        path = str(path)
        if self._share is None or not self._share.is_available():
            logger.warning("Sharing unavailable for %s", path)
            return ExportResult.failed(ErrorKind.SHARING_UNAVAILABLE, SHARE_UNAVAILABLE_MSG, path)

        try:
            done = self._share.share(path, mime_type_for(path), SHARE_DIALOG_TITLE)
        except OSError:
            logger.error("Share failed for %s", path, exc_info=True)
            return ExportResult.failed(ErrorKind.SHARE_FAILED, SHARE_FAILED_MSG, path)
        if not done:
            return ExportResult.failed(ErrorKind.SHARE_FAILED, SHARE_CANCELLED_MSG, path)
        logger.info("File shared successfully: %s", path)
        return ExportResult.ok(path)

    def email_attachment(
        self, path: str | Path, recipient: Optional[str] = None
    ) -> ExportResult:
        path = str(path)
        if self._mail is None or not self._mail.is_available():
            logger.warning("Email unavailable for %s", path)
            return ExportResult.failed(ErrorKind.EMAIL_UNAVAILABLE, EMAIL_UNAVAILABLE_MSG, path)

        to = recipient or self._mail.default_recipient()
        if not to:
            return ExportResult.failed(ErrorKind.EMAIL_UNAVAILABLE, EMAIL_NO_RECIPIENT_MSG, path)

        body = EMAIL_BODY_TEMPLATE.format(
            file_name=Path(path).name,
            export_date=format_display_date(self._clock().date(), self._date_format),
        )
        try:
            msg = build_message(
                path, [to], self._mail.sender, EMAIL_SUBJECT, body, mime_type_for(path)
            )
            self._mail.send(msg)
        except (OSError, ValueError, smtplib.SMTPException):
            logger.error("Email failed for %s", path, exc_info=True)
            return ExportResult.failed(ErrorKind.EMAIL_FAILED, EMAIL_FAILED_MSG, path)
        return ExportResult.ok(path)
