from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import LOG_LEVEL, UTF8_NAMES


class DetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    encoding: Optional[str] = Field(default=None, examples=["utf-8", "latin-1", None])
    has_bom: bool = False

    @property
    def is_utf8(self) -> bool:
        return self.encoding in UTF8_NAMES

    def describe(self) -> str:
        if not self.encoding:
            return "unknown"
        return f"{self.encoding}{' BOM' if self.has_bom else ''} found"


class NormalizationDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    rewrite: bool
    write_bom: bool


class Outcome(str, Enum):
    REWRITTEN = "rewritten"
    SKIPPED = "skipped"
    FAILED = "failed"


class FileReport(BaseModel):
    path: Path
    outcome: Outcome
    detection: Optional[DetectionResult] = None
    error: Optional[str] = None


class RunSummary(BaseModel):
    """Per-run tallies. ``rewritten`` is the count reported to the user."""

    model_config = ConfigDict(frozen=True)

    rewritten: int = 0
    skipped: int = 0
    failed: int = 0

    def tally(self, report: FileReport) -> RunSummary:
        field = report.outcome.value
        return self.model_copy(update={field: getattr(self, field) + 1})


class ScanSettings(BaseModel):
    target: str = ""
    recurse: bool = False
    nobackup: bool = True
    set_bom: bool = False
    log_level: str = LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "WARNING"
