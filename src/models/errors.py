"""
Domain errors for playground resolution and animation parsing

Both errors are raised by the core and caught at the selection boundary
(PlaygroundService), which turns them into events for the UI layer.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from models.domain.config import EffectiveConfig


class PlaygroundError(Exception):
    """Base class for playground domain errors"""
    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MissingMainImage(PlaygroundError):
    """Background image absent after resolution - the selection cannot be displayed"""
    def __init__(self, directory: Path, path: Optional[Path], config: "EffectiveConfig"):
        super().__init__(
            code="MISSING_MAIN_IMAGE",
            message=f"Playground cannot load the main image: {path or '<none>'}",
            details={"directory": str(directory), "path": str(path) if path else None},
        )
        self.directory = directory
        self.path = path
        self.config = config


class MalformedAnimationScript(PlaygroundError):
    """animation.txt contains a line the parser cannot place"""
    def __init__(self, path: Path, line_number: int, line: str, reason: str):
        super().__init__(
            code="MALFORMED_ANIMATION_SCRIPT",
            message=f"{path.name}:{line_number}: {reason}",
            details={"path": str(path), "line_number": line_number, "line": line},
        )
        self.path = path
        self.line_number = line_number
        self.line = line
        self.reason = reason
