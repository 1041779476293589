"""Top-level xcconfig parser: statement loop and include resolution.

:class:`XcconfigParser` reads a whole input, alternating between include
directives and settings. Included files are parsed by recursing into the
same loop with a derived :class:`FileContext`, and their settings are
spliced in at the directive's position, so the result is a pre-order walk
of the include tree.

Include names are resolved in order, first match wins:

1. absolute names are used as-is, if that path exists;
2. relative to the directory of the including file, if that path exists;
3. against each search path in the order given, if that path exists.

Anything else is an :class:`UnresolvableIncludeError` (or silently skipped
for ``#include?``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from xcconfparse.config.schema import ParserConfig
from xcconfparse.fs import FileSystem, InvalidPathError
from xcconfparse.parser.errors import (
    CannotOpenFileError,
    IncludeCycleError,
    IncludeDepthError,
    IncludedFileError,
    IncludeWithoutFileContextError,
    UnresolvableIncludeError,
    XcconfigError,
)
from xcconfparse.parser.grammar import IncludeDirective, SettingGrammar
from xcconfparse.parser.model import (
    FileContext,
    ParseContext,
    PredicatedConfigValue,
    StandaloneContext,
)
from xcconfparse.parser.tokens import Tokenizer

if TYPE_CHECKING:
    from xcconfparse.graph.include_graph import IncludeGraph

logger = logging.getLogger("xcconfparse.parser.driver")

PathLike = Union[str, Path]


class XcconfigParser:
    """Parser for xcconfig files and standalone setting expressions.

    The parser holds only configuration; every call builds its own
    tokenizer and context, so one instance can serve concurrent parses.

    Args:
        config: Parser options. Defaults to ``ParserConfig()``.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()

    def parse_file(
        self,
        filesystem: FileSystem,
        path: PathLike,
        search_paths: Optional[Iterable[PathLike]] = None,
        include_graph: Optional["IncludeGraph"] = None,
    ) -> List[PredicatedConfigValue]:
        """Parse ``path`` and every file it includes.

        Args:
            filesystem: File system used to open and probe files.
            path: File to parse.
            search_paths: Extra include roots; defaults to the configured ones.
            include_graph: Optional recorder for include edges.

        Returns:
            All settings in source order with includes spliced in.

        Raises:
            XcconfigError: On the first lexical, syntax or include failure.
        """
        if search_paths is None:
            search_paths = self.config.search_paths
        context = FileContext(
            filesystem=filesystem,
            current_file=Path(path),
            search_paths=tuple(Path(p) for p in search_paths),
        )
        if include_graph is not None:
            include_graph.add_file(context.current_file)
        settings = self._parse_file(context, include_graph)
        logger.debug("Parsed %d setting(s) from %s", len(settings), path)
        return settings

    def parse_setting(self, text: str) -> PredicatedConfigValue:
        """Parse a single setting expression with no file context.

        Raises:
            IncludeWithoutFileContextError: If the text holds an include.
            XcconfigSyntaxError: If the text is not exactly one setting.
        """
        context = StandaloneContext()
        grammar = SettingGrammar(
            Tokenizer(text, context.source_name),
            strip_trailing_whitespace=self.config.strip_trailing_whitespace,
        )
        setting: Optional[PredicatedConfigValue] = None
        while not grammar.at_end():
            if grammar.at_include():
                self._include(grammar.parse_include(), context, None)
            elif setting is not None:
                raise grammar.error("end of input", grammar.peek())
            else:
                setting = grammar.parse_setting()
        if setting is None:
            raise grammar.error("setting name", grammar.peek())
        return setting

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _parse_file(
        self,
        context: FileContext,
        include_graph: Optional["IncludeGraph"],
    ) -> List[PredicatedConfigValue]:
        path = context.current_file
        try:
            reader = context.filesystem.reader_if_exists(path)
        except OSError as exc:
            raise CannotOpenFileError(path) from exc
        if reader is None:
            raise CannotOpenFileError(path)

        with reader:
            try:
                text = reader.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise CannotOpenFileError(path, reason=str(exc)) from exc
            grammar = SettingGrammar(
                Tokenizer(text, context.source_name),
                strip_trailing_whitespace=self.config.strip_trailing_whitespace,
            )
            return self._parse_statements(grammar, context, include_graph)

    def _parse_statements(
        self,
        grammar: SettingGrammar,
        context: ParseContext,
        include_graph: Optional["IncludeGraph"],
    ) -> List[PredicatedConfigValue]:
        settings: List[PredicatedConfigValue] = []
        while not grammar.at_end():
            if grammar.at_include():
                directive = grammar.parse_include()
                settings.extend(self._include(directive, context, include_graph))
            else:
                settings.append(grammar.parse_setting())
        return settings

    def _include(
        self,
        directive: IncludeDirective,
        context: ParseContext,
        include_graph: Optional["IncludeGraph"],
    ) -> List[PredicatedConfigValue]:
        if not isinstance(context, FileContext):
            raise IncludeWithoutFileContextError(directive.path)

        resolved = resolve_include(context, directive.path)
        if resolved is None:
            if directive.optional:
                logger.debug(
                    "Skipping optional include '%s' from %s",
                    directive.path,
                    context.current_file,
                )
                return []
            raise UnresolvableIncludeError(directive.path, context.current_file)

        if include_graph is not None:
            include_graph.add_include(context.current_file, resolved, directive.optional)

        chain = context.include_chain + (context.current_file,)
        if self.config.detect_include_cycles and resolved in chain:
            start = chain.index(resolved)
            raise IncludeCycleError(chain[start:] + (resolved,))
        if context.depth + 1 > self.config.max_include_depth:
            raise IncludeDepthError(resolved, self.config.max_include_depth)

        logger.debug("Including %s from %s", resolved, context.current_file)
        try:
            return self._parse_file(context.child(resolved), include_graph)
        except (IncludeCycleError, IncludeDepthError):
            # Cycle and depth errors describe the nesting themselves.
            raise
        except XcconfigError as exc:
            raise IncludedFileError(resolved, context.current_file, exc) from exc


def resolve_include(context: FileContext, name: str) -> Optional[Path]:
    """Resolve an include name for the file in ``context``.

    Returns:
        The resolved path, or None when no candidate exists.
    """
    filesystem = context.filesystem
    requested = Path(name)
    if requested.is_absolute():
        return requested if filesystem.exists(requested) else None

    try:
        candidate = filesystem.resolve_sibling(context.current_file, name)
    except InvalidPathError as exc:
        logger.debug("Invalid include path '%s' next to %s: %s", name, context.current_file, exc)
    else:
        if filesystem.exists(candidate):
            return candidate

    for root in context.search_paths:
        try:
            candidate = filesystem.resolve(root, name)
        except InvalidPathError as exc:
            logger.debug("Invalid include path '%s' under %s: %s", name, root, exc)
            continue
        if filesystem.exists(candidate):
            logger.debug("Resolved include '%s' via search path %s", name, root)
            return candidate
    return None


_DEFAULT_PARSER = XcconfigParser()


def parse_file(
    filesystem: FileSystem,
    path: PathLike,
    search_paths: Iterable[PathLike] = (),
) -> List[PredicatedConfigValue]:
    """Parse an xcconfig file with default options. See :meth:`XcconfigParser.parse_file`."""
    return _DEFAULT_PARSER.parse_file(filesystem, path, search_paths)


def parse_setting(text: str) -> PredicatedConfigValue:
    """Parse one setting expression with default options."""
    return _DEFAULT_PARSER.parse_setting(text)


__all__ = ["XcconfigParser", "parse_file", "parse_setting", "resolve_include"]
