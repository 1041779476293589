"""Output formats for parsed xcconfig settings."""

from .json import export_json, settings_to_data
from .xcconfig import render_settings

__all__ = ["export_json", "settings_to_data", "render_settings"]
