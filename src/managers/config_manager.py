"""
Config Manager

Loads and persists the launcher's editor settings (editor_settings.yaml),
falling back to factory defaults when the user file is missing or broken.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from models.domain.editor import EditorSettings
from models.schemas.editor_settings import EditorSettingsSchema
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "config"


class ConfigManager:
    """
    Editor settings manager

    Load order:
    1. settings_path (user file, written by save())
    2. defaults_path (factory_defaults.yaml shipped with the package)
    3. EditorSettings() model defaults

    Example:
        config = ConfigManager(Path("editor_settings.yaml"))
        settings = config.load()
        settings.selected_playground = "Beach"
        config.save(settings)
    """

    def __init__(
        self,
        settings_path: Path = Path("editor_settings.yaml"),
        defaults_path: Path = DEFAULT_CONFIG_DIR / "factory_defaults.yaml"
    ):
        """
        Args:
            settings_path: User settings file
            defaults_path: Factory defaults fallback
        """
        self.settings_path = Path(settings_path)
        self.factory_defaults_path = Path(defaults_path)
        self.settings: EditorSettings = EditorSettings()

    def load(self) -> EditorSettings:
        """Load user settings, falling back to factory defaults"""
        loaded = self._read(self.settings_path)
        if loaded is None:
            log.warn("Falling back to factory defaults", path=self.settings_path)
            loaded = self.factory_defaults()

        self.settings = loaded
        log.info(
            "Editor settings loaded",
            selected_playground=self.settings.selected_playground,
            start_direct=self.settings.start_direct_playground,
        )
        return self.settings

    def factory_defaults(self) -> EditorSettings:
        """Factory defaults file, or model defaults when that is unusable too"""
        defaults = self._read(self.factory_defaults_path)
        if defaults is None:
            log.warn("Factory defaults unavailable, using built-in defaults")
            return EditorSettings()
        return defaults

    def save(self, settings: Optional[EditorSettings] = None) -> None:
        """Persist settings (the current ones when omitted)"""
        if settings is not None:
            self.settings = settings

        payload = EditorSettingsSchema.from_domain(self.settings).model_dump()
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True)

        log.info("Saved settings", path=self.settings_path)

    def reset(self) -> EditorSettings:
        """Replace current settings with factory defaults (not persisted)"""
        log.info("Resetting settings...")
        self.settings = self.factory_defaults()
        log.info("Settings now standard")
        return self.settings

    def accept_license(self) -> None:
        """Record license acceptance and persist it"""
        self.settings.accepted_playground_license = True
        self.save()

    # ------------------------------------------------------------------

    def _read(self, path: Path) -> Optional[EditorSettings]:
        if not path.is_file():
            log.debug(f"Settings file not found: {path}")
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"expected a mapping, got {type(data).__name__}")
            return EditorSettingsSchema.model_validate(data).to_domain()

        except (OSError, yaml.YAMLError, ValueError, ValidationError) as ex:
            log.error(f"Failed to load {path.name}", error=str(ex), error_type=type(ex).__name__)
            return None
