from __future__ import annotations

from pathlib import Path

from .rules import UTF8_BOM


def has_utf8_bom(path: Path) -> bool:
    """Return True if the file literally starts with the UTF-8 BOM bytes.

    Files shorter than the BOM never match. Errors opening the file are
    left to the caller.
    """
    with Path(path).open("rb") as f:
        head = f.read(len(UTF8_BOM))
    return len(head) == len(UTF8_BOM) and head == UTF8_BOM
