"""Exception hierarchy for xcconfig parsing.

Every failure raised by the parser derives from :class:`XcconfigError`, so
callers can catch a single type at their boundary. Positional errors
(lexical and syntax) carry the source name, line and column of the
offending input; include failures carry the requested name and the file
that asked for it.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

PathLike = Union[str, Path]


class XcconfigError(Exception):
    """Base class for all xcconfig parse failures."""

    pass


# =============================================================================
# Positional errors
# =============================================================================


class ParseError(XcconfigError):
    """Error tied to a position in the parsed text.

    Attributes:
        message: Human readable description without the location prefix.
        source: File path or ``<string>`` for standalone text.
        line: 1-based line number.
        column: 1-based column number.
        offset: 0-based character offset into the source text.
    """

    def __init__(
        self,
        message: str,
        source: str = "<string>",
        line: int = 1,
        column: int = 1,
        offset: int = 0,
    ) -> None:
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        self.offset = offset
        super().__init__(f"{source}:{line}:{column}: {message}")


class LexicalError(ParseError):
    """Input character not recognized by the tokenizer in its current mode."""

    pass


class XcconfigSyntaxError(ParseError):
    """Token stream does not match the grammar.

    Attributes:
        expected: Description of what the grammar expected.
        found: Text of the token actually found (empty at end of input).
    """

    def __init__(
        self,
        expected: str,
        found: str,
        source: str = "<string>",
        line: int = 1,
        column: int = 1,
        offset: int = 0,
    ) -> None:
        self.expected = expected
        self.found = found
        shown = repr(found) if found else "end of input"
        super().__init__(
            f"expected {expected}, found {shown}",
            source=source,
            line=line,
            column=column,
            offset=offset,
        )


# =============================================================================
# Include and file errors
# =============================================================================


class UnresolvableIncludeError(XcconfigError):
    """Include target not found next to the current file or in any search path."""

    def __init__(self, requested: str, including_file: Optional[PathLike] = None) -> None:
        self.requested = requested
        self.including_file = Path(including_file) if including_file is not None else None
        where = f" (included from {self.including_file})" if self.including_file else ""
        super().__init__(f"Unable to resolve include '{requested}'{where}")


class IncludeWithoutFileContextError(XcconfigError):
    """Include directive found while parsing text that has no backing file."""

    def __init__(self, requested: str) -> None:
        self.requested = requested
        super().__init__(
            f"Cannot include '{requested}': no file context available for includes"
        )


class CannotOpenFileError(XcconfigError):
    """Input file does not exist, cannot be opened or cannot be decoded.

    Attributes:
        path: File that could not be read.
        reason: Underlying failure, when there is one.
    """

    def __init__(self, path: PathLike, reason: Optional[str] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Cannot open file: {self.path}{detail}")


class IncludeCycleError(XcconfigError):
    """A file includes itself, directly or through other files.

    Attributes:
        chain: Files in include order, ending with the repeated file.
    """

    def __init__(self, chain: Sequence[PathLike]) -> None:
        self.chain: List[Path] = [Path(p) for p in chain]
        super().__init__(
            "Include cycle detected: " + " -> ".join(str(p) for p in self.chain)
        )


class IncludeDepthError(XcconfigError):
    """Include nesting went deeper than the configured limit."""

    def __init__(self, path: PathLike, max_depth: int) -> None:
        self.path = Path(path)
        self.max_depth = max_depth
        super().__init__(
            f"Include depth limit of {max_depth} exceeded while including {self.path}"
        )


class IncludedFileError(XcconfigError):
    """Failure inside an included file, annotated with the include site.

    One wrapper is added per include level, so a failure three files deep
    reads as a chain of ``included file`` notes ending with the innermost
    positional error.

    Attributes:
        path: The included file that failed to parse.
        including_file: The file whose include directive pulled it in.
        cause: The wrapped error: a ParseError, an include or file error, or
            another IncludedFileError. Cycle and depth errors are never wrapped.
    """

    def __init__(
        self,
        path: PathLike,
        including_file: PathLike,
        cause: XcconfigError,
    ) -> None:
        self.path = Path(path)
        self.including_file = Path(including_file)
        self.cause = cause
        super().__init__(
            f"In file '{self.path}' included from '{self.including_file}': {cause}"
        )

    @property
    def root_cause(self) -> XcconfigError:
        """Innermost error of the include chain."""
        error: XcconfigError = self
        while isinstance(error, IncludedFileError):
            error = error.cause
        return error

    @property
    def chain(self) -> List[Path]:
        """Files from the outermost including file down to the failing one."""
        files = [self.including_file]
        error: XcconfigError = self
        while isinstance(error, IncludedFileError):
            files.append(error.path)
            error = error.cause
        return files


__all__ = [
    "XcconfigError",
    "ParseError",
    "LexicalError",
    "XcconfigSyntaxError",
    "UnresolvableIncludeError",
    "IncludeWithoutFileContextError",
    "CannotOpenFileError",
    "IncludeCycleError",
    "IncludeDepthError",
    "IncludedFileError",
]
