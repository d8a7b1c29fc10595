"""
Deterministic normalization rules.

This file exists to make the encoding policy explicit and enforceable.
"""

import os

UTF8_BOM = b"\xef\xbb\xbf"

# Detector names treated as "already UTF-8". Matched case-sensitively.
UTF8_NAMES = frozenset({"ascii", "utf8", "utf-8"})

TARGET_ENCODING = "utf-8"
TARGET_ENCODING_BOM = "utf-8-sig"  # UTF-8 with BOM
FALLBACK_DECODING = "utf-8"

BACKUP_SUFFIX = ".bak"
DEFAULT_PATTERN = "*"

LOG_LEVEL = os.getenv("UNBOM_LOG_LEVEL", "WARNING")
