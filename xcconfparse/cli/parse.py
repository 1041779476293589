"""Parse command implementation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from rich.console import Console
from rich.table import Table

from xcconfparse.cli.common import load_command_config
from xcconfparse.export import export_json, render_settings, settings_to_data
from xcconfparse.fs import LocalFileSystem
from xcconfparse.parser import PredicatedConfigValue, XcconfigError, XcconfigParser
from xcconfparse.parser.model import render_value

logger = logging.getLogger("xcconfparse.cli.parse")


def parse_command(args) -> int:
    """Execute parse command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    try:
        config, search_paths = load_command_config(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    filesystem = LocalFileSystem(encoding=config.encoding)
    parser = XcconfigParser(config)
    try:
        settings = parser.parse_file(filesystem, Path(args.file), search_paths)
    except XcconfigError as e:
        logger.error("%s", e)
        return 1

    logger.info("Parsed %d setting(s) from %s", len(settings), args.file)

    output = getattr(args, "output", None)
    fmt = getattr(args, "format", "json")
    if fmt == "json" and output:
        export_json(settings, Path(output))
        return 0

    if fmt == "table":
        Console().print(settings_table(settings))
        return 0

    if fmt == "xcconfig":
        text = render_settings(settings)
    else:
        text = json.dumps(settings_to_data(settings), indent=2, ensure_ascii=False) + "\n"

    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    else:
        print(text, end="")
    return 0


def settings_table(settings: List[PredicatedConfigValue]) -> Table:
    table = Table(title="xcconfig settings")
    table.add_column("Key", style="bold")
    table.add_column("Conditions")
    table.add_column("Value")
    for setting in settings:
        table.add_row(
            setting.key,
            ", ".join(c.render() for c in setting.conditions),
            render_value(setting.value),
        )
    return table
