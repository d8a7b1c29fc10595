from __future__ import annotations

import glob
import logging
import os
from pathlib import Path
from typing import Iterator, Tuple

from .rules import DEFAULT_PATTERN

logger = logging.getLogger(__name__)


class DirectoryNotFound(FileNotFoundError):
    """The directory to scan does not exist."""

    def __init__(self, directory: Path):
        super().__init__(f"Directory not found: {directory}")
        self.directory = directory


def split_target(target: str) -> Tuple[Path, str]:
    """Split a CLI target into (directory, file-name pattern).

    ``dir`` and ``dir/`` scan everything in ``dir``; ``dir/*.txt`` scans the
    matching files; a bare ``*.txt`` or ``file.txt`` is looked up in ``.``.
    Only ``*`` and ``?`` are wildcards; a name without them is matched
    literally, brackets included.
    """
    if not target or target.endswith(("/", os.sep)) or Path(target).is_dir():
        return Path(target or "."), DEFAULT_PATTERN

    path = Path(target)
    directory = path.parent if str(path.parent) else Path(".")
    name = path.name or DEFAULT_PATTERN
    if not any(ch in name for ch in "*?"):
        name = glob.escape(name)
    return directory, name


def iter_files(directory: Path, pattern: str = DEFAULT_PATTERN, recurse: bool = False) -> Iterator[Path]:
    """Iterate over files in a directory matching a file-name pattern.

    Args:
        directory (Path): Directory to scan.
        pattern (str): Glob matched against file names only.
        recurse (bool): Descend into subdirectories.

    Yields:
        Path: Paths to each matching file.

    Raises:
        DirectoryNotFound: on the first pull, if ``directory`` is missing.
    """
    logger.debug("path=%s pattern=%s recurse=%s", directory, pattern, recurse)
    if not directory.is_dir():
        raise DirectoryNotFound(directory)

    matches = directory.rglob(pattern) if recurse else directory.glob(pattern)
    for p in matches:
        if p.is_file():
            yield p
