"""
Core normalization logic.

Responsibilities:
- combine the detector's verdict with the raw BOM prefix check
- decide whether a file needs rewriting
- rewrite in place as UTF-8, with or without BOM
- keep one file's failure from stopping the scan
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Callable, Iterable, Optional

from .bom import has_utf8_bom
from .detect import Detector
from .models import DetectionResult, FileReport, NormalizationDecision, Outcome, RunSummary
from .rules import (
    BACKUP_SUFFIX,
    FALLBACK_DECODING,
    TARGET_ENCODING,
    TARGET_ENCODING_BOM,
)

logger = logging.getLogger(__name__)

ReportCallback = Callable[[FileReport], None]


def inspect(path: Path, detector: Detector) -> DetectionResult:
    """
    Detect encoding and BOM state of a file.

    The detector's own BOM flag only counts for UTF-8 family encodings;
    a literal BOM prefix counts regardless of the detected encoding.
    """
    detected = detector.detect(path)
    has_bom = (detected.is_utf8 and detected.has_bom) or has_utf8_bom(path)
    return detected.model_copy(update={"has_bom": has_bom})


def decide(detection: DetectionResult, add_bom: bool) -> NormalizationDecision:
    if detection.is_utf8 and detection.has_bom == add_bom:
        return NormalizationDecision(rewrite=False, write_bom=add_bom)
    return NormalizationDecision(rewrite=True, write_bom=add_bom)


def _source_codec(detection: DetectionResult) -> str:
    # utf-8-sig also reads UTF-8 without a signature
    if detection.is_utf8 or detection.has_bom:
        return TARGET_ENCODING_BOM
    return detection.encoding or FALLBACK_DECODING


def transcode(raw: bytes, detection: DetectionResult, write_bom: bool) -> bytes:
    """
    Re-encode file bytes as UTF-8.

    Rules:
    - Decode strictly; undecodable input raises UnicodeDecodeError.
    - Leading U+FEFF characters are dropped so the output carries at most
      the one BOM we write ourselves.
    - Newlines are left untouched.
    """
    text = raw.decode(_source_codec(detection)).lstrip("\ufeff")
    return text.encode(TARGET_ENCODING_BOM if write_bom else TARGET_ENCODING)


def _replace_atomic(path: Path, payload: bytes) -> None:
    """Write payload next to path, then swap it in with one rename."""
    mode = stat.S_IMODE(path.stat().st_mode)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as tmp_file:
            tmp_file.write(payload)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def backup_path(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def rewrite(path: Path, detection: DetectionResult, write_bom: bool, nobackup: bool = True) -> None:
    """
    Replace a file's content with its UTF-8 rendition.

    With ``nobackup=False`` the original is first copied to ``<name>.bak``.
    Nothing is touched on disk until decoding has succeeded. Symlinks are
    followed; the link itself stays in place.
    """
    target = Path(os.path.realpath(path))
    payload = transcode(target.read_bytes(), detection, write_bom)
    if not nobackup:
        shutil.copy2(target, backup_path(target))
    _replace_atomic(target, payload)


def normalize_file(
    path: Path,
    add_bom: bool,
    detector: Detector,
    nobackup: bool = True,
) -> FileReport:
    """Process one file. Never raises for per-file problems."""
    detection: Optional[DetectionResult] = None
    try:
        detection = inspect(path, detector)
        decision = decide(detection, add_bom)
        logger.debug("%s: %s -> %s", path, detection, decision)
        if not decision.rewrite:
            return FileReport(path=path, outcome=Outcome.SKIPPED, detection=detection)

        rewrite(path, detection, decision.write_bom, nobackup=nobackup)
        return FileReport(path=path, outcome=Outcome.REWRITTEN, detection=detection)
    except Exception as exc:
        logger.debug("%s: normalization failed", path, exc_info=True)
        return FileReport(
            path=path,
            outcome=Outcome.FAILED,
            detection=detection,
            error=str(exc) or type(exc).__name__,
        )


def scan(
    paths: Iterable[Path],
    add_bom: bool,
    detector: Detector,
    nobackup: bool = True,
    on_report: Optional[ReportCallback] = None,
) -> RunSummary:
    """
    Normalize every path in turn and fold the outcomes into a RunSummary.

    Errors raised by ``paths`` itself (e.g. a missing root directory) are
    not caught here.
    """
    summary = RunSummary()
    for path in paths:
        report = normalize_file(path, add_bom, detector, nobackup=nobackup)
        if on_report is not None:
            on_report(report)
        summary = summary.tally(report)
    return summary
