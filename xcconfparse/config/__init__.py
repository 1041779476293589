"""Configuration schema and loading for xcconfparse."""

from .schema import ParserConfig
from .loader import load_parser_config

__all__ = [
    "ParserConfig",
    "load_parser_config",
]
