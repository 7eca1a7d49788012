from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from . import config
from .exceptions import InvalidThresholdError


@dataclass(frozen=True)
class ProcessingConfig:
    """
    Settings shared by every file of a single run.
    """
    threshold: int = config.DEFAULT_THRESHOLD
    recursive: bool = False

    def __post_init__(self):
        # bool is an int subclass; reject it explicitly
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int):
            raise InvalidThresholdError(f"Threshold must be an integer, got {self.threshold!r}")
        if not config.MIN_THRESHOLD <= self.threshold <= config.MAX_THRESHOLD:
            raise InvalidThresholdError(
                f"Threshold must be between {config.MIN_THRESHOLD} and "
                f"{config.MAX_THRESHOLD}, got {self.threshold}"
            )


class FileClassification(Enum):
    STRUCTURED_FORMAT = 'structured'  # JPEG XL: decode, crop, re-encode
    STANDARD_IMAGE = 'image'
    NON_IMAGE = 'other'


class OutcomeStatus(Enum):
    OK = 'ok'
    SKIPPED = 'skipped'
    FAILED = 'failed'


@dataclass
class ProcessingOutcome:
    """
    Result of dispatching one file.
    """
    path: Path
    status: OutcomeStatus
    reason: Optional[str] = None          # set when SKIPPED
    error: Optional[Exception] = None     # set when FAILED

    @classmethod
    def ok(cls, path: Path) -> "ProcessingOutcome":
        return cls(path, OutcomeStatus.OK)

    @classmethod
    def skipped(cls, path: Path, reason: str) -> "ProcessingOutcome":
        return cls(path, OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, path: Path, error: Exception) -> "ProcessingOutcome":
        return cls(path, OutcomeStatus.FAILED, error=error)

    @property
    def is_failure(self) -> bool:
        return self.status is OutcomeStatus.FAILED
