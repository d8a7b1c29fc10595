"""Normalize text files to UTF-8 and strip (or add) the UTF-8 BOM."""

__version__ = "0.1.0"
