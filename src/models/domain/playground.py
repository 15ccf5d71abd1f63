"""Playground and plugin app descriptors"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class PlaygroundDescriptor:
    """
    A playground directory found by the scanner.

    Identity is the directory name, unique within one playgrounds root.
    """
    name: str
    directory: Path
    icon_path: Optional[Path] = None


@dataclass(frozen=True)
class AppDescriptor:
    """A plugin app directory containing entry.py"""
    name: str
    entry_path: Path
    icon_path: Optional[Path] = None
