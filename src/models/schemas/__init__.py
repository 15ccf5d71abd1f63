"""Pydantic schemas for files read from disk"""

from .editor_settings import EditorSettingsSchema

__all__ = ["EditorSettingsSchema"]
