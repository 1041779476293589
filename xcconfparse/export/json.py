"""JSON export for parsed xcconfig settings."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from xcconfparse.parser.model import PredicatedConfigValue

logger = logging.getLogger("xcconfparse.export.json")


def settings_to_data(settings: Iterable[PredicatedConfigValue]) -> List[Dict[str, Any]]:
    return [setting.to_dict() for setting in settings]


def export_json(settings: Iterable[PredicatedConfigValue], output_path: Path) -> None:
    """Export settings to a JSON file.

    Args:
        settings: Parsed settings, in order.
        output_path: Output file path.
    """
    logger.info("Exporting settings to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings_to_data(settings)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info("JSON export completed: %d settings", len(data))
