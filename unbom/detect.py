"""
Encoding detection.

The engine only depends on the ``Detector`` protocol; the default
implementation wraps charset-normalizer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from charset_normalizer import from_path

from .models import DetectionResult

logger = logging.getLogger(__name__)


class Detector(Protocol):
    def detect(self, path: Path) -> DetectionResult: ...


def canonical_encoding(name: Optional[str]) -> Optional[str]:
    """Map a Python codec name (``utf_8``, ``latin_1``) to its dashed form."""
    if not name:
        return None
    return name.lower().replace("_", "-")


class CharsetNormalizerDetector:
    """Best-effort detection over the full file content."""

    def detect(self, path: Path) -> DetectionResult:
        match = from_path(path).best()
        if match is None:
            logger.debug("%s: no encoding detected", path)
            return DetectionResult()

        # charset-normalizer reports the BOM/signature on the match itself
        result = DetectionResult(
            encoding=canonical_encoding(match.encoding),
            has_bom=bool(match.bom),
        )
        logger.debug("%s: detected %s (bom=%s)", path, result.encoding, result.has_bom)
        return result
