"""Helpers shared by the file-based CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from xcconfparse.config import ParserConfig, load_parser_config

logger = logging.getLogger("xcconfparse.cli.common")


def load_command_config(args) -> Tuple[ParserConfig, List[Path]]:
    """Load the parser config and the effective include search paths.

    Search paths from ``-I`` are tried after those from the config file.

    Raises:
        ValueError: If the configuration is invalid.
        OSError: If the configuration file cannot be read.
    """
    config = load_parser_config(getattr(args, "config", None))
    search_paths = list(config.search_paths)
    search_paths.extend(Path(p) for p in (getattr(args, "include_dirs", None) or []))
    logger.debug("Include search paths: %s", [str(p) for p in search_paths])
    return config, search_paths
