"""
Command line entry point: resolve the target, walk files, normalize each one.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .detect import CharsetNormalizerDetector, Detector
from .models import FileReport, Outcome, RunSummary, ScanSettings
from .normalize import scan
from .rules import LOG_LEVEL
from .walk import DirectoryNotFound, iter_files, split_target

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.handlers.clear()
    root.addHandler(console_handler)

    # charset-normalizer explains every guess at DEBUG
    logging.getLogger("charset_normalizer").setLevel(logging.WARNING)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="unbom",
        description="Convert text files to UTF-8 and remove (or add) the UTF-8 BOM.",
    )
    p.add_argument("path", help="File, directory, or directory with a file pattern (dir/*.txt).")
    p.add_argument("-r", "--recurse", action="store_true", help="Recurse into subdirectories.")
    p.add_argument("--nobackup", dest="nobackup", action="store_true", default=True,
                   help="Do not keep a .bak copy of modified files (default).")
    p.add_argument("--backup", dest="nobackup", action="store_false",
                   help="Keep a .bak copy of each modified file.")
    p.add_argument("--setbom", dest="set_bom", action="store_true",
                   help="Write converted files with a UTF-8 BOM instead of stripping it.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def build_settings(args: argparse.Namespace) -> ScanSettings:
    return ScanSettings(
        target=args.path,
        recurse=args.recurse,
        nobackup=args.nobackup,
        set_bom=args.set_bom,
        log_level="DEBUG" if args.verbose else LOG_LEVEL,
    )


def print_report(report: FileReport) -> None:
    """One line per rewritten or failed file; skipped files stay silent."""
    if report.outcome is Outcome.REWRITTEN:
        print(f"{report.detection.describe()} - converting: {report.path} done")
    elif report.outcome is Outcome.FAILED:
        print(f"{report.path}: {report.error}", file=sys.stderr)


def run(settings: ScanSettings, detector: Optional[Detector] = None) -> Optional[RunSummary]:
    """Scan ``settings.target``. Returns None when the directory is missing."""
    directory, pattern = split_target(settings.target)
    logger.debug("settings=%s directory=%s pattern=%s", settings, directory, pattern)

    try:
        summary = scan(
            iter_files(directory, pattern, recurse=settings.recurse),
            add_bom=settings.set_bom,
            detector=detector or CharsetNormalizerDetector(),
            nobackup=settings.nobackup,
            on_report=print_report,
        )
    except DirectoryNotFound as exc:
        print(exc, file=sys.stderr)
        return None

    print(f"{summary.rewritten} file(s) processed")
    logger.info("rewritten=%d skipped=%d failed=%d", summary.rewritten, summary.skipped, summary.failed)
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    settings = build_settings(parse_args(argv))
    configure_logging(settings.log_level)
    run(settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
