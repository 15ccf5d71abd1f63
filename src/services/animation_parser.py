"""
Animation script parser

animation.txt format:

    sec_0.5
    TopAnim=anim/top_1.png
    LeftAnim=anim/left_1.png

    sec_1.25
    TopAnim=anim/top_2.png

A `sec_<seconds>` line opens a frame, `<Slot>Anim=<path>` lines fill the open
frame. Blank and unrecognized lines are ignored.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Dict, List, Optional

from models.domain.overlay import OverlayFrame
from models.errors import MalformedAnimationScript
from utils.logger import get_logger, LogCategory
from utils.parsing import iter_content_lines, parse_invariant_float, resolve_relative

log = get_logger().for_category(LogCategory.ANIMATION)

ANIMATION_FILENAME = "animation.txt"
FRAME_MARKER = "sec_"

# Field line key -> OverlayFrame attribute
FIELD_KEYS: Dict[str, str] = {
    "TopAnim": "top",
    "BottomAnim": "bottom",
    "LeftAnim": "left",
    "RightAnim": "right",
    "BackgroundAnim": "background",
}


class ParserState(Enum):
    NO_FRAME = auto()
    FRAME_OPEN = auto()


@dataclass
class _OpenFrame:
    """Frame under construction - frozen into an OverlayFrame when closed"""
    duration: float
    paths: Dict[str, Path] = field(default_factory=dict)

    def close(self) -> OverlayFrame:
        return OverlayFrame(duration=self.duration, **self.paths)


class AnimationScriptParser:
    """
    Line-driven parser with an explicit "no frame open" state.

    A field line in NO_FRAME state is a MalformedAnimationScript error
    rather than a write into a frame that doesn't exist.
    """

    def __init__(self, directory: Path, script_path: Path):
        self.directory = directory
        self.script_path = script_path
        self.state = ParserState.NO_FRAME
        self._current: Optional[_OpenFrame] = None
        self._frames: List[OverlayFrame] = []

    def feed(self, line_number: int, line: str) -> None:
        """Consume one stripped, non-blank line"""
        if line.startswith(FRAME_MARKER):
            self._open_frame(line_number, line)
            return

        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        attribute = FIELD_KEYS.get(key) if sep else None
        if attribute is None:
            log.debug(f"Ignored animation line {line_number}", line=line)
            return

        if self.state is ParserState.NO_FRAME or self._current is None:
            raise MalformedAnimationScript(
                self.script_path, line_number, line,
                f"'{key}' appears before any '{FRAME_MARKER}' frame marker",
            )

        self._current.paths[attribute] = resolve_relative(self.directory, value)

    def finish(self) -> List[OverlayFrame]:
        """Close the open frame (if any) and return all frames in script order"""
        self._close_frame()
        self.state = ParserState.NO_FRAME
        return list(self._frames)

    # ------------------------------------------------------------------

    def _open_frame(self, line_number: int, line: str) -> None:
        duration = parse_invariant_float(line[len(FRAME_MARKER):])
        if duration is None or duration < 0:
            raise MalformedAnimationScript(
                self.script_path, line_number, line,
                "frame marker needs a non-negative number of seconds",
            )

        self._close_frame()
        self._current = _OpenFrame(duration=duration)
        self.state = ParserState.FRAME_OPEN

    def _close_frame(self) -> None:
        if self._current is not None:
            self._frames.append(self._current.close())
            self._current = None


def parse_animation(directory: Path) -> List[OverlayFrame]:
    """
    Parse <directory>/animation.txt into an ordered list of frames.

    Args:
        directory: Playground directory; field paths resolve against it

    Returns:
        Frames in script order, empty when the script doesn't exist

    Raises:
        MalformedAnimationScript: field line before the first frame marker,
            or a frame marker without a valid duration
    """
    script_path = directory / ANIMATION_FILENAME
    if not script_path.is_file():
        log.debug(f"No animation script in {directory.name}")
        return []

    parser = AnimationScriptParser(directory, script_path)
    for line_number, line in iter_content_lines(script_path):
        parser.feed(line_number, line)

    frames = parser.finish()
    log.info(
        f"Animation loaded: {len(frames)} frames",
        playground=directory.name,
        period=f"{sum(f.duration for f in frames):.2f}s",
    )
    return frames
