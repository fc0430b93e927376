"""Export the offline expenses and deposits as a CSV or JSON file.

Pipeline: record snapshot -> filter -> serialize -> name -> write, then
optionally share or email the written file.
"""
import logging
from datetime import date, datetime
from typing import Callable, Optional

from models.export_options import ExportOptions
from models.export_result import ErrorKind, ExportResult
from models.summary import Summary
from services.delivery import DeliveryAdapter
from services.export_filter import filter_records
from services.record_source import OfflineRecordSource, RecordSourceError
from services.serializers import render
from services.summary_service import summarize
from utils.constants import DEFAULT_DISPLAY_DATE_FORMAT, EXPORT_FILE_PREFIX
from utils.date_helpers import utc_now

logger = logging.getLogger(__name__)

SOURCE_FAILED_MSG = "Failed to read stored transactions"
EXPORT_FAILED_MSG = "Failed to export data"


def artifact_name(options: ExportOptions, today: Optional[date] = None) -> str:
    """e.g. BudgetWise_Export_2024-05-01.csv; same day and format, same name."""
    d = today or utc_now().date()
    return f"{EXPORT_FILE_PREFIX}{d.isoformat()}.{options.format.value}"


class ExportService:
    def __init__(
        self,
        record_source: OfflineRecordSource,
        delivery: DeliveryAdapter,
        date_format: str = DEFAULT_DISPLAY_DATE_FORMAT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._source = record_source
        self._delivery = delivery
        self._date_format = date_format
        self._clock = clock

    def preview(self, options: ExportOptions) -> tuple[Summary, int, int]:
        """Return (summary, expense_count, deposit_count) without writing anything."""
        filtered = filter_records(self._source.snapshot(), options, self._clock())
        summary = summarize(filtered.expenses, filtered.deposits)
        return summary, len(filtered.expenses), len(filtered.deposits)

    def try_preview(self, options: ExportOptions) -> Optional[tuple[Summary, int, int]]:
        """preview(), or None when the totals cannot be computed. Never raises."""
        try:
            return self.preview(options)
        except RecordSourceError:
            logger.warning("Preview skipped: record source unreadable")
        except Exception:
            logger.error("Preview failed", exc_info=True)
        return None

    def render(self, options: ExportOptions) -> tuple[str, str]:
        """Return (file_name, content) for the current snapshot."""
        now = self._clock()
        filtered = filter_records(self._source.snapshot(), options, now)
        content = render(filtered, options, now, self._date_format)
        return artifact_name(options, now.date()), content

    def export(self, options: ExportOptions) -> ExportResult:
        logger.info(
            "Starting data export: format=%s range=%s expenses=%s deposits=%s",
            options.format.value, options.date_range.value,
            options.include_expenses, options.include_deposits,
        )
        try:
            name, content = self.render(options)
        except RecordSourceError:
            logger.error("Export aborted: record source unreadable", exc_info=True)
            return ExportResult.failed(ErrorKind.SOURCE_FAILED, SOURCE_FAILED_MSG)
        except Exception:
            logger.error("Export aborted while rendering", exc_info=True)
            return ExportResult.failed(ErrorKind.WRITE_FAILED, EXPORT_FAILED_MSG)
        return self._delivery.write(name, content)

    def share(self, path: str) -> ExportResult:
        return self._delivery.share(path)

    def email(self, path: str, recipient: Optional[str] = None) -> ExportResult:
        return self._delivery.email_attachment(path, recipient)

    def export_and_share(self, options: ExportOptions) -> ExportResult:
        result = self.export(options)
        if not result.succeeded:
            return result
        return self._delivery.share(result.artifact_path)

    def export_and_email(
        self, options: ExportOptions, recipient: Optional[str] = None
    ) -> ExportResult:
        result = self.export(options)
        if not result.succeeded:
            return result
        return self._delivery.email_attachment(result.artifact_path, recipient)
