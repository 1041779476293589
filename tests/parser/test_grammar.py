"""Condition, value and setting grammar via parse_setting."""

from __future__ import annotations

import pytest

from xcconfparse.config import ParserConfig
from xcconfparse.parser import (
    Condition,
    IncludeWithoutFileContextError,
    Interpolation,
    LexicalError,
    Literal,
    XcconfigParser,
    XcconfigSyntaxError,
    parse_setting,
)


def test_plain_setting() -> None:
    """A simple setting has no conditions and a single literal."""
    setting = parse_setting("FOO = bar")

    assert setting.key == "FOO"
    assert setting.conditions == ()
    assert setting.value == (Literal("bar"),)


def test_literal_value_is_kept_whole() -> None:
    """Values without '$' come back as exactly one literal."""
    text = "-framework UIKit,weak=1 [x] /usr/lib/a.dylib"
    setting = parse_setting(f"OTHER_LDFLAGS = {text}")
    assert setting.value == (Literal(text),)


def test_empty_value() -> None:
    """Nothing after '=' gives an empty value."""
    assert parse_setting("FOO =").value == ()


def test_prefix_and_empty_condition_values() -> None:
    """'*' marks prefix conditions; a missing value is the empty string."""
    prefix = parse_setting("A[sdk=iphoneos*] = 1")
    empty = parse_setting("A[config=] = 1")
    any_sdk = parse_setting("A[sdk=*] = 1")

    assert prefix.conditions == (Condition("sdk", "iphoneos", True),)
    assert empty.conditions == (Condition("config", "", False),)
    assert any_sdk.conditions == (Condition("sdk", "", True),)


def test_condition_order_is_canonical() -> None:
    """Source order of conditions does not affect the parsed setting."""
    first = parse_setting("A[a=1,b=2] = x")
    second = parse_setting("A[b=2,a=1] = x")

    assert first == second
    assert first.conditions == (Condition("a", "1"), Condition("b", "2"))


def test_multiple_bracket_groups_merge() -> None:
    """All bracket groups after a key feed one condition set."""
    setting = parse_setting("A[sdk=iphoneos*][arch=arm64, config=debug] = 1")

    assert setting.conditions == (
        Condition("arch", "arm64"),
        Condition("config", "debug"),
        Condition("sdk", "iphoneos", True),
    )


def test_only_identical_conditions_collapse() -> None:
    """Duplicates collapse; distinct values for one key are kept."""
    assert len(parse_setting("A[a=1][a=1] = x").conditions) == 1
    assert len(parse_setting("A[a=1][a=2] = x").conditions) == 2


def test_simple_interpolation() -> None:
    """$NAME becomes an interpolation holding the name."""
    setting = parse_setting("PATH_X = $FOO/bin")
    assert setting.value == (Interpolation((Literal("FOO"),)), Literal("/bin"))


def test_nested_interpolation() -> None:
    """$(A_$(B)) nests an interpolation inside another."""
    expected = (Interpolation((Literal("A_"), Interpolation((Literal("B"),)))),)

    assert parse_setting("X = $(A_$(B))").value == expected
    assert parse_setting("X = ${A_$(B)}").value == expected
    assert parse_setting("X = $(A_${B})").value == expected


def test_brace_and_paren_forms_are_equivalent() -> None:
    """$(NAME), ${NAME} and $NAME parse to the same structure."""
    assert parse_setting("X = $(FOO)") == parse_setting("X = ${FOO}")
    assert parse_setting("X = $(FOO)") == parse_setting("X = $FOO")


def test_unmatched_closers_are_literal_text() -> None:
    """Closers outside an open interpolation, or of the other kind, are text."""
    assert parse_setting("X = a)b}c").value == (Literal("a)b}c"),)
    assert parse_setting("X = $(A}B)").value == (Interpolation((Literal("A}B"),)),)


def test_mixed_value_keeps_source_order() -> None:
    """Literals and interpolations appear in source order."""
    setting = parse_setting('X = -I"$(SRCROOT)/include" $(inherited)')

    assert setting.value == (
        Literal('-I"'),
        Interpolation((Literal("SRCROOT"),)),
        Literal('/include" '),
        Interpolation((Literal("inherited"),)),
    )


def test_deep_nesting_is_not_truncated() -> None:
    """Nesting deeper than the recursion limit still parses completely."""
    depth = 2000
    setting = parse_setting("X = " + "$(" * depth + "A" + ")" * depth)

    node = setting.value[0]
    seen = 0
    while isinstance(node, Interpolation):
        seen += 1
        node = node.parts[0]
    assert seen == depth
    assert node == Literal("A")


def test_trailing_comment_and_blanks_are_dropped() -> None:
    """Value-mode comments and trailing blanks are not part of the value."""
    assert parse_setting("X = a b  // note").value == (Literal("a b"),)


def test_trailing_blanks_kept_when_configured() -> None:
    """strip_trailing_whitespace=False keeps blanks at the end of a value."""
    parser = XcconfigParser(ParserConfig(strip_trailing_whitespace=False))
    assert parser.parse_setting("X = a  ").value == (Literal("a  "),)


def test_render_round_trip() -> None:
    """Rendering a setting and parsing it again gives an equal setting."""
    setting = parse_setting("FOO[sdk=iphoneos*][arch=arm64] = -L${BAR}/lib $QUX")

    assert setting.render() == "FOO[arch=arm64,sdk=iphoneos*] = -L$(BAR)/lib $(QUX)"
    assert parse_setting(setting.render()) == setting


@pytest.mark.parametrize(
    "text, rendered",
    [
        ("FOO = ${A)}", "FOO = ${A)}"),
        ("FOO = $(A})", "FOO = $(A})"),
        ("FOO = ${X_$(Y)_)}", "FOO = ${X_$(Y)_)}"),
    ],
)
def test_render_keeps_literal_closers_inside(text: str, rendered: str) -> None:
    """A literal ')' or '}' inside an interpolation survives a render round trip."""
    setting = parse_setting(text)

    assert setting.render() == rendered
    assert parse_setting(setting.render()) == setting


def test_references() -> None:
    """references() lists plain names once, including nested ones."""
    setting = parse_setting("X = $(A) ${B}_$(C_$(D)) $A")
    assert setting.references() == ["A", "B", "D"]


@pytest.mark.parametrize(
    "text",
    [
        "FOO bar",
        "FOO[sdk=a = 1",
        "FOO[sdk=a\nBAR = 1",
        "FOO[sdk=a",
        "FOO[] = 1",
        "= 1",
        "X = $(FOO",
        "X = ${FOO)",
        "",
    ],
)
def test_malformed_settings_raise_syntax_error(text: str) -> None:
    """Grammar violations fail instead of producing a partial entry."""
    with pytest.raises(XcconfigSyntaxError):
        parse_setting(text)


def test_syntax_error_reports_position() -> None:
    """Syntax errors carry the location and what was expected."""
    with pytest.raises(XcconfigSyntaxError) as excinfo:
        parse_setting("A = 1\nB = 2")

    error = excinfo.value
    assert error.line == 2
    assert error.expected == "end of input"
    assert str(error).startswith("<string>:2:1:")


def test_lexical_error_from_standalone_text() -> None:
    """Unrecognized characters surface as LexicalError."""
    with pytest.raises(LexicalError):
        parse_setting("FOO[SDK=x] = 1")


@pytest.mark.parametrize(
    "text",
    [
        '#include "base.xcconfig"',
        '#include? "base.xcconfig"',
        'FOO = 1\n#include "base.xcconfig"',
    ],
)
def test_standalone_text_rejects_includes(text: str) -> None:
    """Includes need a backing file."""
    with pytest.raises(IncludeWithoutFileContextError) as excinfo:
        parse_setting(text)
    assert excinfo.value.requested == "base.xcconfig"
