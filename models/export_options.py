from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


class DateRange(str, Enum):
    ALL = "all"
    LAST_30_DAYS = "last30days"
    LAST_90_DAYS = "last90days"
    LAST_365_DAYS = "last365days"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value) -> "DateRange":
        """Accept enum members, canonical values and the short 'last30' spellings."""
        if isinstance(value, cls):
            return value
        raw = str(value).strip().lower()
        if raw in ("last30", "last90", "last365"):
            raw += "days"
        return cls(raw)


@dataclass(frozen=True)
class ExportOptions:
    format: ExportFormat = ExportFormat.CSV
    date_range: DateRange = DateRange.ALL
    start_date: Optional[datetime] = None   # custom range only
    end_date: Optional[datetime] = None     # custom range only
    include_expenses: bool = True
    include_deposits: bool = True

    def __post_init__(self):
        # Allow plain strings at construction time
        object.__setattr__(self, "format", ExportFormat(self.format))
        object.__setattr__(self, "date_range", DateRange.parse(self.date_range))

    def validate(self):
        """Caller-side checks; the pipeline itself runs on any options."""
        if not self.include_expenses and not self.include_deposits:
            raise ValueError("Please select at least expenses or deposits to export.")
        if (
            self.date_range == DateRange.CUSTOM
            and self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise ValueError("Start date must be on or before end date.")
