from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    SOURCE_FAILED = "source_failed"
    WRITE_FAILED = "write_failed"
    SHARE_FAILED = "share_failed"
    SHARING_UNAVAILABLE = "sharing_unavailable"
    EMAIL_FAILED = "email_failed"
    EMAIL_UNAVAILABLE = "email_unavailable"


UNAVAILABLE_KINDS = (ErrorKind.SHARING_UNAVAILABLE, ErrorKind.EMAIL_UNAVAILABLE)


@dataclass(frozen=True)
class ExportResult:
    succeeded: bool
    artifact_path: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def capability_unavailable(self) -> bool:
        return self.error_kind in UNAVAILABLE_KINDS

    @classmethod
    def ok(cls, artifact_path: Optional[str] = None) -> "ExportResult":
        return cls(succeeded=True, artifact_path=artifact_path)

    @classmethod
    def failed(
        cls, kind: ErrorKind, message: str, artifact_path: Optional[str] = None
    ) -> "ExportResult":
        return cls(
            succeeded=False,
            artifact_path=artifact_path,
            error_message=message,
            error_kind=kind,
        )

