"""
Shared fixtures: playground directories on disk and a controllable sleep.
"""

import asyncio
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.domain.config import EffectiveConfig  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def write_png(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def make_playground(tmp_path):
    """
    Factory: make_playground("Beach", images=["playground.png"], settings="...", animation="...")
    """
    root = tmp_path / "playgrounds"

    def _make(
        name: str = "Scrubland",
        images: Optional[List[str]] = None,
        settings: Optional[str] = None,
        animation: Optional[str] = None,
        icon: bool = True,
    ) -> Path:
        directory = root / name
        directory.mkdir(parents=True, exist_ok=True)
        for image in images if images is not None else ["playground.png"]:
            write_png(directory / image)
        if icon:
            write_png(directory / "icon.png")
        if settings is not None:
            (directory / "settings.txt").write_text(settings, encoding="utf-8")
        if animation is not None:
            (directory / "animation.txt").write_text(animation, encoding="utf-8")
        return directory

    _make.root = root
    return _make


@pytest.fixture
def defaults() -> EffectiveConfig:
    return EffectiveConfig()


class ManualSleep:
    """
    Sleep replacement for Playback: records every requested delay and blocks
    until the test calls tick().
    """

    def __init__(self):
        self.delays: List[float] = []
        self._pending: Optional[asyncio.Future] = None

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        self._pending = asyncio.get_running_loop().create_future()
        await self._pending

    async def wait_pending(self) -> None:
        for _ in range(100):
            if self._pending is not None and not self._pending.done():
                return
            await asyncio.sleep(0)
        raise AssertionError("playback never went back to sleep")

    async def tick(self) -> None:
        """Let the pending delay elapse, then wait for the next one to start"""
        await self.wait_pending()
        self._pending.set_result(None)
        await asyncio.sleep(0)
        await self.wait_pending()


@pytest.fixture
def manual_sleep() -> ManualSleep:
    return ManualSleep()


class Recorder:
    """Collects events (or callback values) in arrival order"""

    def __init__(self):
        self.items: List = []

    def __call__(self, item) -> None:
        self.items.append(item)

    def of_type(self, cls) -> List:
        return [i for i in self.items if isinstance(i, cls)]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def settings_yaml(tmp_path) -> Dict[str, Path]:
    return {
        "settings": tmp_path / "editor_settings.yaml",
        "defaults": tmp_path / "factory_defaults.yaml",
    }
