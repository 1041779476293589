"""Value objects produced by the xcconfig parser.

A parsed file is a flat list of :class:`PredicatedConfigValue` entries.
Each entry has a key, a canonically ordered tuple of :class:`Condition`
guards and a value made of :class:`Literal` and :class:`Interpolation`
fragments. Interpolations nest, so ``$(FOO_$(BAR))`` is an interpolation
whose parts are a literal and another interpolation.

All objects are frozen dataclasses. Value fragments are normalized on
construction (adjacent literals merged, empty literals dropped) so equality
compares logical structure rather than how the text happened to be split
into tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from xcconfparse.fs import FileSystem


@dataclass(frozen=True, order=True)
class Condition:
    """One ``key=value`` or ``key=value*`` guard from a setting's brackets.

    Ordering is lexicographic over ``(key, value, is_prefix)``, which gives
    condition sets a canonical order independent of source order.

    Attributes:
        key: Condition name, e.g. ``sdk`` or ``arch``.
        value: Expected value; empty means any value for this key.
        is_prefix: True when the value ended with ``*`` (prefix match).
    """

    key: str
    value: str = ""
    is_prefix: bool = False

    def render(self) -> str:
        return f"{self.key}={self.value}{'*' if self.is_prefix else ''}"

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value, "is_prefix": self.is_prefix}


@dataclass(frozen=True)
class Literal:
    """Raw value text emitted verbatim."""

    text: str

    def render(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        return {"literal": self.text}


@dataclass(frozen=True)
class Interpolation:
    """Reference to another setting, possibly built from nested references.

    ``$NAME`` produces ``Interpolation((Literal("NAME"),))``; the bracketed
    forms carry whatever was parsed between the brackets.
    """

    parts: Tuple["TokenValue", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", normalize_value(self.parts))

    @property
    def name(self) -> Optional[str]:
        """Referenced setting name, or None when it depends on other references."""
        if not self.parts or not all(isinstance(p, Literal) for p in self.parts):
            return None
        return "".join(p.text for p in self.parts)

    def render(self) -> str:
        """Render as ``$(...)``, or ``${...}`` when the interior has a literal ``)``."""
        inner = render_value(self.parts)
        if any(isinstance(p, Literal) and ")" in p.text for p in self.parts):
            return "${" + inner + "}"
        return "$(" + inner + ")"

    def to_dict(self) -> Dict[str, Any]:
        return {"interpolation": [p.to_dict() for p in self.parts]}


TokenValue = Union[Literal, Interpolation]


def normalize_value(parts: Iterable[TokenValue]) -> Tuple[TokenValue, ...]:
    """Merge adjacent literals and drop empty ones."""
    result: List[TokenValue] = []
    for part in parts:
        if isinstance(part, Literal):
            if not part.text:
                continue
            if result and isinstance(result[-1], Literal):
                result[-1] = Literal(result[-1].text + part.text)
                continue
        elif not isinstance(part, Interpolation):
            raise TypeError(f"Unsupported value fragment: {part!r}")
        result.append(part)
    return tuple(result)


def render_value(parts: Iterable[TokenValue]) -> str:
    return "".join(part.render() for part in parts)


def iter_interpolations(parts: Iterable[TokenValue]) -> Iterator[Interpolation]:
    """Yield every interpolation in ``parts``, outer ones before nested ones."""
    for part in parts:
        if isinstance(part, Interpolation):
            yield part
            yield from iter_interpolations(part.parts)


@dataclass(frozen=True)
class PredicatedConfigValue:
    """One parsed setting: key, guards and value.

    Attributes:
        key: Setting name (letters, digits and underscore).
        conditions: Sorted, duplicate-free tuple of conditions.
        value: Ordered value fragments.
    """

    key: str
    conditions: Tuple[Condition, ...] = ()
    value: Tuple[TokenValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", tuple(sorted(set(self.conditions))))
        object.__setattr__(self, "value", normalize_value(self.value))

    def references(self) -> List[str]:
        """Names of settings referenced by the value, in first-seen order."""
        seen: Dict[str, None] = {}
        for interpolation in iter_interpolations(self.value):
            name = interpolation.name
            if name is not None:
                seen.setdefault(name, None)
        return list(seen)

    def render(self) -> str:
        """Render back to a single line of xcconfig source."""
        guards = ""
        if self.conditions:
            guards = "[" + ",".join(c.render() for c in self.conditions) + "]"
        value = render_value(self.value)
        return f"{self.key}{guards} = {value}" if value else f"{self.key}{guards} ="

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "conditions": [c.to_dict() for c in self.conditions],
            "value": [v.to_dict() for v in self.value],
        }


# =============================================================================
# Parse contexts
# =============================================================================


@dataclass(frozen=True)
class StandaloneContext:
    """Context for text with no backing file; includes are not possible."""

    source_name: str = "<string>"


@dataclass(frozen=True)
class FileContext:
    """Context for parsing a file that may include other files.

    A fresh context is derived for every included file via :meth:`child`;
    contexts are never mutated.

    Attributes:
        filesystem: File system used to open and probe files.
        current_file: File being parsed.
        search_paths: Extra include roots, tried in order after the
            current file's directory.
        include_chain: Files that included this one, outermost first.
    """

    filesystem: FileSystem = field(compare=False)
    current_file: Path
    search_paths: Tuple[Path, ...] = ()
    include_chain: Tuple[Path, ...] = ()

    @property
    def source_name(self) -> str:
        return str(self.current_file)

    @property
    def depth(self) -> int:
        return len(self.include_chain)

    def child(self, included_file: Path) -> "FileContext":
        """Context for ``included_file``, included from the current file."""
        return replace(
            self,
            current_file=included_file,
            include_chain=self.include_chain + (self.current_file,),
        )


ParseContext = Union[StandaloneContext, FileContext]


__all__ = [
    "Condition",
    "Literal",
    "Interpolation",
    "TokenValue",
    "PredicatedConfigValue",
    "StandaloneContext",
    "FileContext",
    "ParseContext",
    "normalize_value",
    "render_value",
    "iter_interpolations",
]
