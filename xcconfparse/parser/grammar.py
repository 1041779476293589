"""Recursive-descent grammar for xcconfig statements.

Grammar (tokens from :mod:`xcconfparse.parser.tokens`)::

    statement  := include | setting
    include    := INCLUDE QUOTED_STRING
    setting    := LITERAL ( "[" conditions "]" )* "=" value ( EOL | EOF )
    conditions := condition ( "," condition )*
    condition  := COND_IDENT "=" [ COND_IDENT ] [ "*" ]
    value      := ( VALUE_LITERAL | VARIABLE | "$(" value ")" | "${" value "}"
                  | ")" | "}" )*

A closing bracket only ends an interpolation opened with the matching
bracket; anywhere else it is literal text. Nested interpolations are
parsed with an explicit stack, so nesting depth is not limited by the
interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from xcconfparse.parser.errors import XcconfigSyntaxError
from xcconfparse.parser.model import (
    Condition,
    Interpolation,
    Literal,
    PredicatedConfigValue,
    TokenValue,
    normalize_value,
)
from xcconfparse.parser.tokens import Token, TokenKind, Tokenizer


_CLOSERS = {
    TokenKind.DOLLAR_PAREN: TokenKind.PAREN_CLOSE,
    TokenKind.DOLLAR_BRACE: TokenKind.BRACE_CLOSE,
}
_CLOSER_TEXT = {TokenKind.PAREN_CLOSE: "')'", TokenKind.BRACE_CLOSE: "'}'"}
_LINE_END = (TokenKind.EOL, TokenKind.EOF)


@dataclass(frozen=True)
class IncludeDirective:
    """An ``#include`` or ``#include?`` statement.

    Attributes:
        path: Included name, without quotes.
        optional: True for ``#include?``; unresolvable targets are skipped.
        line: Line of the directive.
        column: Column of the directive.
    """

    path: str
    optional: bool
    line: int
    column: int


class SettingGrammar:
    """Parser over a single token stream.

    Args:
        tokenizer: Token source; its ``source`` names the input in errors.
        strip_trailing_whitespace: Drop blanks at the end of each value.
    """

    def __init__(self, tokenizer: Tokenizer, strip_trailing_whitespace: bool = True) -> None:
        self.tokenizer = tokenizer
        self.strip_trailing_whitespace = strip_trailing_whitespace
        self._lookahead: Optional[Token] = None

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def peek(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self.tokenizer.next_token()
        return self._lookahead

    def advance(self) -> Token:
        token = self.peek()
        self._lookahead = None
        return token

    def expect(self, kind: TokenKind, expected: str) -> Token:
        token = self.peek()
        if token.kind is not kind:
            raise self.error(expected, token)
        return self.advance()

    def error(self, expected: str, token: Token) -> XcconfigSyntaxError:
        return XcconfigSyntaxError(
            expected,
            token.text,
            source=self.tokenizer.source,
            line=token.line,
            column=token.column,
            offset=token.offset,
        )

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def at_include(self) -> bool:
        return self.peek().kind is TokenKind.INCLUDE

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_include(self) -> IncludeDirective:
        keyword = self.expect(TokenKind.INCLUDE, "'#include'")
        name = self.expect(TokenKind.QUOTED_STRING, "quoted include path")
        return IncludeDirective(
            path=name.text[1:-1],
            optional=keyword.text.endswith("?"),
            line=keyword.line,
            column=keyword.column,
        )

    def parse_setting(self) -> PredicatedConfigValue:
        """Parse one setting including its terminating end of line."""
        key = self.expect(TokenKind.LITERAL, "setting name")
        conditions: List[Condition] = []
        while self.peek().kind is TokenKind.LBRACKET:
            self.advance()
            conditions.extend(self.parse_condition_group())
        self.expect(TokenKind.EQUALS, "'='")
        value = self.parse_value()
        end = self.peek()
        if end.kind not in _LINE_END:
            raise self.error("end of line", end)
        if end.kind is TokenKind.EOL:
            self.advance()
        return PredicatedConfigValue(key.text, tuple(conditions), value)

    # ------------------------------------------------------------------
    # Conditions
    # ------------------------------------------------------------------

    def parse_condition_group(self) -> List[Condition]:
        """Parse ``cond ( , cond )* ]`` after an opening bracket."""
        conditions = [self.parse_condition()]
        while self.peek().kind is TokenKind.COMMA:
            self.advance()
            conditions.append(self.parse_condition())
        self.expect(TokenKind.RBRACKET, "',' or ']'")
        return conditions

    def parse_condition(self) -> Condition:
        key = self.expect(TokenKind.COND_IDENT, "condition name")
        self.expect(TokenKind.COND_EQUALS, "'=' after condition name")
        value = ""
        if self.peek().kind is TokenKind.COND_IDENT:
            value = self.advance().text
        is_prefix = False
        if self.peek().kind is TokenKind.STAR:
            self.advance()
            is_prefix = True
        return Condition(key.text, value, is_prefix)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def parse_value(self) -> Tuple[TokenValue, ...]:
        """Parse value fragments up to, not including, the end of line."""
        # Each frame: (closing kind or None for the top level, parts, opener)
        stack: List[Tuple[Optional[TokenKind], List[TokenValue], Optional[Token]]] = [
            (None, [], None)
        ]
        while True:
            token = self.peek()
            closer, parts, opener = stack[-1]
            if token.kind in _LINE_END:
                if opener is not None:
                    raise self.error(
                        f"{_CLOSER_TEXT[closer]} to close '{opener.text}' "
                        f"opened at line {opener.line}, column {opener.column}",
                        token,
                    )
                break
            self.advance()
            if token.kind is TokenKind.VALUE_LITERAL:
                parts.append(Literal(token.text))
            elif token.kind is TokenKind.VARIABLE:
                parts.append(Interpolation((Literal(token.text[1:]),)))
            elif token.kind in _CLOSERS:
                stack.append((_CLOSERS[token.kind], [], token))
            elif token.kind is closer:
                stack.pop()
                stack[-1][1].append(Interpolation(tuple(parts)))
            elif token.kind in _CLOSER_TEXT:
                parts.append(Literal(token.text))
            else:
                raise self.error("value text", token)

        parts = stack[0][1]
        if self.strip_trailing_whitespace and parts and isinstance(parts[-1], Literal):
            parts[-1] = Literal(parts[-1].text.rstrip(" \t"))
        return normalize_value(parts)


__all__ = ["IncludeDirective", "SettingGrammar"]
