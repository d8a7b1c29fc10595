from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from unbom.models import DetectionResult

BOM = b"\xef\xbb\xbf"


class FakeDetector:
    """Returns canned results keyed by file name; records every call."""

    def __init__(self, default: Optional[DetectionResult] = None, **by_name: DetectionResult):
        self.default = default or DetectionResult(encoding="utf-8")
        self.by_name: Dict[str, DetectionResult] = {k.replace("_", "."): v for k, v in by_name.items()}
        self.calls: List[Path] = []

    def detect(self, path: Path) -> DetectionResult:
        self.calls.append(path)
        return self.by_name.get(path.name, self.default)


class BrokenDetector:
    def detect(self, path: Path) -> DetectionResult:
        raise OSError(f"cannot read {path.name}")


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, data: bytes) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        return p

    return _write


@pytest.fixture
def sample_dir(write_file, tmp_path):
    """a.txt: UTF-8, b.txt: UTF-8 with BOM, c.txt: Latin-1."""
    write_file("a.txt", "plain ascii line\nsecond line\n".encode("utf-8"))
    write_file("b.txt", BOM + "hello with a signature\n".encode("utf-8"))
    write_file("c.txt", "Le café était très chaud, déjà prêt à être servi à la fenêtre.\n".encode("latin-1"))
    return tmp_path
