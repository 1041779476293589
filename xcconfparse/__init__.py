"""xcconfparse - parser for Xcode build configuration (xcconfig) files."""

from xcconfparse.fs import FileSystem, LocalFileSystem, MemoryFileSystem
from xcconfparse.parser import (
    CannotOpenFileError,
    Condition,
    IncludeCycleError,
    IncludeDepthError,
    IncludedFileError,
    IncludeWithoutFileContextError,
    Interpolation,
    LexicalError,
    Literal,
    ParseError,
    PredicatedConfigValue,
    UnresolvableIncludeError,
    XcconfigError,
    XcconfigParser,
    XcconfigSyntaxError,
    parse_file,
    parse_setting,
)

__version__ = "0.1.0"

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "XcconfigParser",
    "parse_file",
    "parse_setting",
    "Condition",
    "Interpolation",
    "Literal",
    "PredicatedConfigValue",
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
]
