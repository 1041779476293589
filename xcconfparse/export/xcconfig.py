"""Render parsed settings back to xcconfig text."""

from typing import Iterable

from xcconfparse.parser.model import PredicatedConfigValue


def render_settings(settings: Iterable[PredicatedConfigValue]) -> str:
    """Render settings one per line; included files appear flattened."""
    return "".join(setting.render() + "\n" for setting in settings)
