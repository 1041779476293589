"""xcconfig tokenizer, grammar and include-resolving driver.

Modules:
- tokens: mode-switching tokenizer
- grammar: condition, value and setting grammar
- driver: file/include driver and the public parse functions
- model: parsed value objects and parse contexts
- errors: exception hierarchy
"""

from .driver import XcconfigParser, parse_file, parse_setting
from .errors import (
    CannotOpenFileError,
    IncludeCycleError,
    IncludeDepthError,
    IncludedFileError,
    IncludeWithoutFileContextError,
    LexicalError,
    ParseError,
    UnresolvableIncludeError,
    XcconfigError,
    XcconfigSyntaxError,
)
from .model import (
    Condition,
    FileContext,
    Interpolation,
    Literal,
    PredicatedConfigValue,
    StandaloneContext,
    TokenValue,
)

__all__ = [
    "XcconfigParser",
    "parse_file",
    "parse_setting",
    "CannotOpenFileError",
    "IncludeCycleError",
    "IncludeDepthError",
    "IncludedFileError",
    "IncludeWithoutFileContextError",
    "LexicalError",
    "ParseError",
    "UnresolvableIncludeError",
    "XcconfigError",
    "XcconfigSyntaxError",
    "Condition",
    "FileContext",
    "Interpolation",
    "Literal",
    "PredicatedConfigValue",
    "StandaloneContext",
    "TokenValue",
]
