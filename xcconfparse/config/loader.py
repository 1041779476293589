"""Helpers for loading parser configuration from TOML/JSON sources.

`load_parser_config` accepts:

* None -> default ParserConfig
* dict -> ParserConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

TOML sources may keep the options at top level or under an
``[xcconfparse]`` table.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from xcconfparse.config.schema import ParserConfig

logger = logging.getLogger("xcconfparse.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

_SECTION = "xcconfparse"


def _detect_format(text: str) -> str:
    return "json" if text.lstrip().startswith(("{", "[")) else "toml"


def load_parser_config(source: ConfigSource) -> ParserConfig:
    """Load ParserConfig from various configuration sources.

    Args:
        source: None, an already-parsed mapping, a path to a .toml/.json
            file, or an inline TOML/JSON string (auto-detected).

    Returns:
        Validated ParserConfig instance.

    Raises:
        ValueError: If the source does not hold a mapping or fails validation.
        TypeError: If the source type is unsupported.
    """
    if source is None:
        logger.debug("No config source provided; using default ParserConfig")
        return ParserConfig()

    if isinstance(source, dict):
        logger.debug("Loading ParserConfig from provided dict")
        return ParserConfig.from_dict(source.get(_SECTION, source))

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if path.is_file():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")
        return ParserConfig.from_dict(data.get(_SECTION, data))

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["load_parser_config"]
