"""
Playground catalog

Enumerates playground directories under a root folder and keeps the list in
sync with the filesystem between scans.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from models.domain.playground import AppDescriptor, PlaygroundDescriptor
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PLAYGROUND)

ICON_FILENAME = "icon.png"
APP_ENTRY_FILENAME = "entry.py"


def _optional_icon(directory: Path) -> Optional[Path]:
    icon = directory / ICON_FILENAME
    return icon if icon.is_file() else None


def scan_playgrounds(root: Path) -> List[PlaygroundDescriptor]:
    """
    One descriptor per subdirectory of root, sorted by name.

    The root is created when missing, so a fresh install shows an empty list.
    """
    root.mkdir(parents=True, exist_ok=True)
    return [
        PlaygroundDescriptor(name=entry.name, directory=entry, icon_path=_optional_icon(entry))
        for entry in sorted(root.iterdir(), key=lambda p: p.name)
        if entry.is_dir()
    ]


def discover_apps(root: Path) -> List[AppDescriptor]:
    """Plugin apps: subdirectories of root that contain entry.py"""
    root.mkdir(parents=True, exist_ok=True)
    apps = [
        AppDescriptor(name=entry.name, entry_path=entry / APP_ENTRY_FILENAME, icon_path=_optional_icon(entry))
        for entry in sorted(root.iterdir(), key=lambda p: p.name)
        if entry.is_dir() and (entry / APP_ENTRY_FILENAME).is_file()
    ]
    log.debug(f"Discovered {len(apps)} apps", root=root)
    return apps


class PlaygroundCatalog:
    """
    Current set of playgrounds, keyed by directory name.

    refresh() replaces descriptors wholesale and reports what changed.
    PlaygroundService drives the periodic rescan.

    Example:
        catalog = PlaygroundCatalog(Path("playgrounds"))
        added, removed = catalog.refresh()
        first = catalog.default_selection(settings.selected_playground)
    """

    def __init__(self, root: Path):
        self.root = root
        self._playgrounds: Dict[str, PlaygroundDescriptor] = {}

    def refresh(self) -> Tuple[List[str], List[str]]:
        """
        Rescan the root.

        Returns:
            (added, removed) playground names, each sorted
        """
        scanned = {p.name: p for p in scan_playgrounds(self.root)}

        added = sorted(set(scanned) - set(self._playgrounds))
        removed = sorted(set(self._playgrounds) - set(scanned))
        self._playgrounds = scanned

        if added or removed:
            log.info(
                f"Playgrounds changed: {len(scanned)} available",
                added=added or "-",
                removed=removed or "-",
            )
        return added, removed

    def names(self) -> List[str]:
        return sorted(self._playgrounds)

    def descriptors(self) -> List[PlaygroundDescriptor]:
        return [self._playgrounds[name] for name in self.names()]

    def get(self, name: str) -> Optional[PlaygroundDescriptor]:
        return self._playgrounds.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._playgrounds

    def __len__(self) -> int:
        return len(self._playgrounds)

    def default_selection(self, saved_name: Optional[str]) -> Optional[PlaygroundDescriptor]:
        """The saved playground when it still exists, otherwise the first one"""
        if saved_name and saved_name in self._playgrounds:
            return self._playgrounds[saved_name]
        descriptors = self.descriptors()
        return descriptors[0] if descriptors else None
