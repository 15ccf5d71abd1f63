"""
Editor settings schema - Pydantic model validating editor_settings.yaml
"""

from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field

from models.domain.editor import EditorSettings


class EditorSettingsSchema(BaseModel):
    """On-disk shape of the launcher settings (snake_case keys)"""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "window_title": "Shimoji-ee Playground",
                "window_width": 960,
                "window_height": 540,
                "selected_playground": "Scrubland Playground",
                "start_direct_playground": False,
            }
        },
    )

    window_title: str = Field("Shimoji-ee Playground", description="Playground window title")
    window_width: float = Field(960, description="Playground window width (px)")
    window_height: float = Field(540, description="Playground window height (px)")
    main_window_top_most: bool = Field(True, description="Keep the playground window above others")

    top_overlay_path: str = Field("playgrounds/Scrubland Playground/top.png")
    bottom_overlay_path: str = Field("")
    left_overlay_path: str = Field("")
    right_overlay_path: str = Field("")
    top_height: float = Field(156, description="Top overlay panel height (px)")
    bottom_height: float = Field(0, description="Bottom overlay panel height (px)")
    left_width: float = Field(0, description="Left overlay panel width (px)")
    right_width: float = Field(0, description="Right overlay panel width (px)")

    selected_playground: str = Field("Scrubland Playground", description="Playground directory name")
    background_path: str = Field("playgrounds/Scrubland Playground/assets/main/playground.png")
    start_direct_playground: bool = Field(False, description="Skip the editor and launch directly")
    accepted_playground_license: bool = Field(False)

    def to_domain(self) -> EditorSettings:
        return EditorSettings(**self.model_dump())

    @classmethod
    def from_domain(cls, settings: EditorSettings) -> "EditorSettingsSchema":
        return cls(**asdict(settings))
