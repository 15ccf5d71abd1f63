"""
Parsing helpers shared by settings.txt and animation.txt readers

All numeric parsing is locale-invariant: '.' is the only decimal separator,
no thousands separators, no nan/inf.
"""

import re
from pathlib import Path
from typing import Iterator, Optional, Tuple

_INVARIANT_FLOAT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_invariant_float(text: str) -> Optional[float]:
    """Parse a locale-invariant floating-point literal, None if it isn't one"""
    text = text.strip()
    if not _INVARIANT_FLOAT.fullmatch(text):
        return None
    value = float(text)
    # Huge exponents overflow to inf
    if value in (float("inf"), float("-inf")):
        return None
    return value


def parse_bool(text: str) -> Optional[bool]:
    """Parse 'true'/'false' (case-insensitive), None otherwise"""
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def split_key_value(line: str) -> Optional[Tuple[str, str]]:
    """Split 'Key=Value' on the first '=', None when there is no '='"""
    key, sep, value = line.partition("=")
    if not sep:
        return None
    return key.strip(), value.strip()


def resolve_relative(directory: Path, value: str) -> Path:
    """Resolve a path taken from a playground file against the playground directory"""
    return directory / value


def iter_content_lines(path: Path) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_number, stripped_line) for every non-blank line.

    Line numbers are 1-based and count blank lines too. Bytes that aren't
    valid UTF-8 decode to U+FFFD instead of failing the whole file.
    """
    with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
        for number, raw in enumerate(f, start=1):
            line = raw.strip()
            if line:
                yield number, line
