"""
Config Resolver

Merges a playground directory over in-memory defaults:

1. defaults (EditorSettings.to_effective_config())
2. conventional sibling files (playground.png, preview.png, top.png, ...)
3. settings.txt overrides, top to bottom, last write wins
4. image re-validation: background required, preview falls back, missing overlays cleared
"""

from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Any

from models.domain.config import EffectiveConfig
from models.errors import MissingMainImage
from utils.logger import get_logger, LogCategory
from utils.parsing import (
    iter_content_lines,
    parse_bool,
    parse_invariant_float,
    resolve_relative,
    split_key_value,
)

log = get_logger().for_category(LogCategory.CONFIG)

SETTINGS_FILENAME = "settings.txt"
MAIN_IMAGE_FILENAME = "playground.png"
PREVIEW_IMAGE_FILENAME = "preview.png"

# Conventional filename -> EffectiveConfig field
CONVENTIONAL_FILES: Dict[str, str] = {
    MAIN_IMAGE_FILENAME: "background_image_path",
    PREVIEW_IMAGE_FILENAME: "preview_image_path",
    "top.png": "top_overlay_path",
    "bottom.png": "bottom_overlay_path",
    "left.png": "left_overlay_path",
    "right.png": "right_overlay_path",
}

OVERLAY_FIELDS = (
    "top_overlay_path",
    "bottom_overlay_path",
    "left_overlay_path",
    "right_overlay_path",
)

# settings.txt key -> (EffectiveConfig field, value parser)
# A parser returning None means "ignore this line".
_SettingParser = Callable[[str, Path], Optional[Any]]


def _number(value: str, _directory: Path) -> Optional[float]:
    return parse_invariant_float(value)


def _flag(value: str, _directory: Path) -> Optional[bool]:
    return parse_bool(value)


def _path(value: str, directory: Path) -> Path:
    return resolve_relative(directory, value)


SETTING_KEYS: Dict[str, Tuple[str, _SettingParser]] = {
    "WindowWidth": ("window_width", _number),
    "WindowHeight": ("window_height", _number),
    "TopHeight": ("top_height", _number),
    "BottomHeight": ("bottom_height", _number),
    "LeftWidth": ("left_width", _number),
    "RightWidth": ("right_width", _number),
    "TopMost": ("top_most", _flag),
    "PlaygroundPath": ("background_image_path", _path),
    "PreviewPath": ("preview_image_path", _path),
    "TopOverlayPath": ("top_overlay_path", _path),
    "BottomOverlayPath": ("bottom_overlay_path", _path),
    "LeftOverlayPath": ("left_overlay_path", _path),
    "RightOverlayPath": ("right_overlay_path", _path),
}


class ConfigResolver:
    """
    Produces the EffectiveConfig for a playground directory.

    Stateless: every call returns a fresh value. settings.txt is parsed
    forgivingly - unknown keys and values that don't parse for their type
    are skipped without touching the result.

    Example:
        resolver = ConfigResolver()
        try:
            config = resolver.resolve(Path("playgrounds/Scrubland"), settings.to_effective_config())
        except MissingMainImage as e:
            show_error(e.message)
    """

    def resolve(self, directory: Path, defaults: EffectiveConfig) -> EffectiveConfig:
        """
        Resolve the effective configuration for one playground.

        Args:
            directory: Playground directory
            defaults: Base values (window and overlay sizes, fallback paths)

        Returns:
            Resolved EffectiveConfig

        Raises:
            MissingMainImage: background image does not exist after resolution
            OSError: settings.txt exists but cannot be read
        """
        fields: Dict[str, Any] = {}
        fields.update(self._find_conventional_files(directory))

        settings_path = directory / SETTINGS_FILENAME
        if settings_path.is_file():
            log.info(f"Loading settings for {directory.name}")
            fields.update(self._read_settings(settings_path, directory))

        config = defaults.with_changes(**fields)
        return self._validate_images(directory, config)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _find_conventional_files(self, directory: Path) -> Dict[str, Optional[Path]]:
        """Presence of each conventional file is authoritative over the defaults"""
        found: Dict[str, Optional[Path]] = {}
        for filename, field_name in CONVENTIONAL_FILES.items():
            candidate = directory / filename
            found[field_name] = candidate if candidate.is_file() else None
        return found

    def _read_settings(self, settings_path: Path, directory: Path) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}

        for line_number, line in iter_content_lines(settings_path):
            pair = split_key_value(line)
            if pair is None:
                log.debug(f"Ignored settings line {line_number}: no '='", line=line)
                continue

            key, raw_value = pair
            entry = SETTING_KEYS.get(key)
            if entry is None:
                log.debug(f"Ignored unknown setting '{key}'", line_number=line_number)
                continue

            field_name, parser = entry
            value = parser(raw_value, directory)
            if value is None:
                log.debug(f"Ignored setting '{key}': invalid value", value=raw_value)
                continue

            overrides[field_name] = value
            log.info(f"Loaded setting '{key}'", value=value)

        return overrides

    def _validate_images(self, directory: Path, config: EffectiveConfig) -> EffectiveConfig:
        # playground.png is mandatory even when PlaygroundPath points elsewhere
        background = config.background_image_path
        main_image = directory / MAIN_IMAGE_FILENAME
        if not main_image.is_file():
            background = main_image
        if background is None or not background.is_file():
            failed = config.with_changes(preview_image_path=None)
            log.error("Playground cannot load the main image", path=background)
            raise MissingMainImage(directory, background, failed)

        preview = config.preview_image_path
        if preview is None or not preview.is_file():
            log.warn(f"Preview image not found, using main image: {background}")
            config = config.with_changes(preview_image_path=background)

        # Overlays named in settings.txt may be missing: cleared, never dangling
        missing = {}
        for field_name in OVERLAY_FIELDS:
            overlay = getattr(config, field_name)
            if overlay is not None and not overlay.is_file():
                log.warn(f"Overlay image not found, cleared: {overlay}", field=field_name)
                missing[field_name] = None

        return config.with_changes(**missing) if missing else config
