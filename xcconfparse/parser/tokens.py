"""Mode-switching tokenizer for xcconfig text.

The tokenizer is a small state machine. Each :class:`LexerMode` has an
ordered rule table; the first rule whose pattern matches at the current
position wins, produces a token (or is skipped) and may switch the mode:

- DEFAULT -> CONDITION on ``[``
- DEFAULT -> SETTING_VALUE on ``=`` (blanks after it are part of the token)
- CONDITION -> DEFAULT on ``]`` (or end of line, which the grammar rejects)
- SETTING_VALUE -> DEFAULT on end of line

Comments (``//``) are dropped in DEFAULT mode together with their newline.
In SETTING_VALUE mode the newline is kept, since it ends the value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, Optional, Pattern, Tuple

from xcconfparse.parser.errors import LexicalError


class LexerMode(Enum):
    """Lexical modes of the tokenizer."""

    DEFAULT = auto()
    SETTING_VALUE = auto()
    CONDITION = auto()


class TokenKind(Enum):
    """Token kinds produced by the tokenizer."""

    # DEFAULT mode
    LITERAL = auto()
    LBRACKET = auto()
    EQUALS = auto()
    INCLUDE = auto()
    QUOTED_STRING = auto()

    # CONDITION mode
    COND_IDENT = auto()
    COND_EQUALS = auto()
    STAR = auto()
    COMMA = auto()
    RBRACKET = auto()

    # SETTING_VALUE mode
    DOLLAR_PAREN = auto()
    DOLLAR_BRACE = auto()
    VARIABLE = auto()
    PAREN_CLOSE = auto()
    BRACE_CLOSE = auto()
    VALUE_LITERAL = auto()
    EOL = auto()

    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A classified slice of the input.

    Attributes:
        kind: Token kind.
        text: Exact matched text.
        offset: 0-based offset of the first character.
        line: 1-based line number.
        column: 1-based column number.
    """

    kind: TokenKind
    text: str
    offset: int
    line: int
    column: int


@dataclass(frozen=True)
class _Rule:
    pattern: Pattern[str]
    kind: Optional[TokenKind]  # None: matched text is skipped
    next_mode: Optional[LexerMode] = None


def _rule(
    regex: str,
    kind: Optional[TokenKind],
    next_mode: Optional[LexerMode] = None,
) -> _Rule:
    return _Rule(re.compile(regex), kind, next_mode)


SETTING_KEY_PATTERN = re.compile(r"[A-Za-z0-9_]+")
CONDITION_IDENT_PATTERN = re.compile(r"[a-z0-9_.]+")

_RULES: Dict[LexerMode, Tuple[_Rule, ...]] = {
    LexerMode.DEFAULT: (
        _rule(r"[ \t\r\n]+", None),
        _rule(r"//[^\n]*\n?", None),
        _rule(r"#include\??", TokenKind.INCLUDE),
        _rule(r'"[^"\r\n]*"', TokenKind.QUOTED_STRING),
        _rule(SETTING_KEY_PATTERN.pattern, TokenKind.LITERAL),
        _rule(r"\[", TokenKind.LBRACKET, LexerMode.CONDITION),
        _rule(r"=[ \t]*", TokenKind.EQUALS, LexerMode.SETTING_VALUE),
    ),
    LexerMode.CONDITION: (
        _rule(r"[ \t]+", None),
        _rule(CONDITION_IDENT_PATTERN.pattern, TokenKind.COND_IDENT),
        _rule(r"=", TokenKind.COND_EQUALS),
        _rule(r"\*", TokenKind.STAR),
        _rule(r",", TokenKind.COMMA),
        _rule(r"\]", TokenKind.RBRACKET, LexerMode.DEFAULT),
        # Unterminated group; the grammar reports it.
        _rule(r"\r\n|\r|\n", TokenKind.EOL, LexerMode.DEFAULT),
    ),
    LexerMode.SETTING_VALUE: (
        _rule(r"//[^\r\n]*", None),
        _rule(r"\r\n|\r|\n", TokenKind.EOL, LexerMode.DEFAULT),
        _rule(r"\$\(", TokenKind.DOLLAR_PAREN),
        _rule(r"\$\{", TokenKind.DOLLAR_BRACE),
        _rule(r"\$[A-Za-z0-9_]+", TokenKind.VARIABLE),
        _rule(r"\)", TokenKind.PAREN_CLOSE),
        _rule(r"\}", TokenKind.BRACE_CLOSE),
        # A lone "$" and runs of text; "/" only when not starting "//".
        _rule(r"\$|(?:[^$)}\r\n/]|/(?!/))+", TokenKind.VALUE_LITERAL),
    ),
}


class Tokenizer:
    """Tokenizer over a complete xcconfig text.

    Args:
        text: Source text.
        source: Name used in error messages (file path or ``<string>``).
    """

    def __init__(self, text: str, source: str = "<string>") -> None:
        self.text = text
        self.source = source
        self.mode = LexerMode.DEFAULT
        self._pos = 0
        self._line = 1
        self._line_start = 0

    def _advance(self, matched: str) -> None:
        newlines = matched.count("\n") + matched.count("\r") - matched.count("\r\n")
        if newlines:
            self._line += newlines
            last = max(matched.rfind("\n"), matched.rfind("\r"))
            self._line_start = self._pos + last + 1
        self._pos += len(matched)

    def next_token(self) -> Token:
        """Return the next token, or an EOF token once input is exhausted.

        Raises:
            LexicalError: If no rule of the current mode matches.
        """
        while self._pos < len(self.text):
            for rule in _RULES[self.mode]:
                match = rule.pattern.match(self.text, self._pos)
                if match is None or not match.group(0):
                    continue
                matched = match.group(0)
                token = None
                if rule.kind is not None:
                    token = Token(
                        rule.kind,
                        matched,
                        self._pos,
                        self._line,
                        self._pos - self._line_start + 1,
                    )
                self._advance(matched)
                if rule.next_mode is not None:
                    self.mode = rule.next_mode
                if token is not None:
                    return token
                break
            else:
                raise LexicalError(
                    f"unexpected character {self.text[self._pos]!r} "
                    f"in {self.mode.name.lower()} mode",
                    source=self.source,
                    line=self._line,
                    column=self._pos - self._line_start + 1,
                    offset=self._pos,
                )
        return Token(
            TokenKind.EOF,
            "",
            self._pos,
            self._line,
            self._pos - self._line_start + 1,
        )

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


__all__ = [
    "CONDITION_IDENT_PATTERN",
    "LexerMode",
    "SETTING_KEY_PATTERN",
    "Token",
    "TokenKind",
    "Tokenizer",
]
