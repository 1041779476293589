"""Setting command: parse one setting expression given on the command line."""

from __future__ import annotations

import json
import logging

from xcconfparse.config import load_parser_config
from xcconfparse.parser import XcconfigError, XcconfigParser

logger = logging.getLogger("xcconfparse.cli.setting")


def setting_command(args) -> int:
    """Execute setting command.

    Returns:
        int: Exit code.
    """
    try:
        config = load_parser_config(getattr(args, "config", None))
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        setting = XcconfigParser(config).parse_setting(args.text)
    except XcconfigError as e:
        logger.error("%s", e)
        return 1

    if getattr(args, "format", "json") == "xcconfig":
        print(setting.render())
    else:
        print(json.dumps(setting.to_dict(), indent=2, ensure_ascii=False))
    return 0
