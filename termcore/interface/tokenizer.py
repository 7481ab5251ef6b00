#!/usr/bin/env python3
# termcore/interface/tokenizer.py
from __future__ import annotations

"""
Lexical analysis of a command line.

Rules:
- Words are separated by ASCII space. A tab outside quotes is rejected.
- `|`, `<`, `>` and `>>` are operators even when glued to a word (`a|b`).
- Double quotes keep their content except `\\"` -> `"` and `\\\\` -> `\\`.
- Single quotes keep their content verbatim; a backslash does not escape the closing quote.
- Outside quotes a backslash takes the next character literally; a trailing backslash is an error.
- A word whose raw source text is exactly `--` becomes END_OF_OPTIONS.

Every token remembers which of its characters came from quotes or escapes so
later stages can tell `a,b` from `"a,b"`.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import TokenizeError, TokenizeErrorKind


class TokenKind(Enum):
    WORD = "word"
    PIPE = "pipe"
    REDIRECT_IN = "redirect-in"
    REDIRECT_OUT = "redirect-out"
    REDIRECT_APPEND = "redirect-append"
    END_OF_OPTIONS = "end-of-options"


@dataclass(frozen=True, slots=True)
class Span:
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class Token:
    """
    One lexical unit.

    Attributes:
        kind: What the token is.
        value: Unquoted, unescaped text.
        span: Location of the raw source text in the input line.
        was_quoted: True if any part of the word came from a quote pair (even an empty one).
        protected: Per-character flags; True where the character was quoted or escaped.
    """
    kind: TokenKind
    value: str
    span: Span
    was_quoted: bool = False
    protected: tuple[bool, ...] = ()

    def is_protected(self, index: int) -> bool:
        return index < len(self.protected) and self.protected[index]


_OPERATORS = {
    "|": TokenKind.PIPE,
    "<": TokenKind.REDIRECT_IN,
    ">": TokenKind.REDIRECT_OUT,
}


class _WordBuilder:
    __slots__ = ("chars", "protected", "start", "quoted", "literal")

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.chars: list[str] = []
        self.protected: list[bool] = []
        self.start = -1
        self.quoted = False
        # False once a quote or escape has been seen
        self.literal = True

    def begin(self, position: int) -> None:
        if self.start < 0:
            self.start = position

    def append(self, ch: str, protected: bool) -> None:
        self.chars.append(ch)
        self.protected.append(protected)

    def build(self, end: int) -> Token | None:
        if self.start < 0:
            return None
        value = "".join(self.chars)
        kind = TokenKind.END_OF_OPTIONS if self.literal and value == "--" else TokenKind.WORD
        token = Token(
            kind=kind,
            value=value,
            span=Span(self.start, end - self.start),
            was_quoted=self.quoted,
            protected=tuple(self.protected),
        )
        self.reset()
        return token


class Tokenizer:
    """Stateless tokenizer; one instance can be shared."""

    def tokenize(self, text: str) -> list[Token]:
        tokens: list[Token] = []
        word = _WordBuilder()
        i = 0
        n = len(text)

        def flush(end: int) -> None:
            token = word.build(end)
            if token is not None:
                tokens.append(token)

        while i < n:
            ch = text[i]

            if ch == " ":
                flush(i)
                i += 1
                continue

            if ch == "\t":
                raise TokenizeError(
                    f"Tab character is not allowed outside quotes (column {i + 1})",
                    TokenizeErrorKind.ILLEGAL_WHITESPACE, i)

            if ch == ">" and i + 1 < n and text[i + 1] == ">":
                flush(i)
                tokens.append(Token(TokenKind.REDIRECT_APPEND, ">>", Span(i, 2)))
                i += 2
                continue

            if ch in _OPERATORS:
                flush(i)
                tokens.append(Token(_OPERATORS[ch], ch, Span(i, 1)))
                i += 1
                continue

            if ch == "\\":
                if i + 1 >= n:
                    raise TokenizeError(
                        "Trailing backslash at end of input",
                        TokenizeErrorKind.DANGLING_ESCAPE, i)
                word.begin(i)
                word.literal = False
                word.append(text[i + 1], True)
                i += 2
                continue

            if ch == '"':
                i = self._read_double_quoted(text, i, word)
                continue

            if ch == "'":
                i = self._read_single_quoted(text, i, word)
                continue

            word.begin(i)
            word.append(ch, False)
            i += 1

        flush(n)
        return tokens

    @staticmethod
    def _read_double_quoted(text: str, start: int, word: _WordBuilder) -> int:
        word.begin(start)
        word.quoted = True
        word.literal = False
        j = start + 1
        n = len(text)
        while j < n:
            c = text[j]
            if c == '"':
                return j + 1
            if c == "\\" and j + 1 < n and text[j + 1] in ('"', "\\"):
                word.append(text[j + 1], True)
                j += 2
                continue
            word.append(c, True)
            j += 1
        raise TokenizeError(
            f"Unclosed double quote (column {start + 1})",
            TokenizeErrorKind.UNCLOSED_QUOTE, start)

    @staticmethod
    def _read_single_quoted(text: str, start: int, word: _WordBuilder) -> int:
        word.begin(start)
        word.quoted = True
        word.literal = False
        end = text.find("'", start + 1)
        if end < 0:
            raise TokenizeError(
                f"Unclosed single quote (column {start + 1})",
                TokenizeErrorKind.UNCLOSED_QUOTE, start)
        for c in text[start + 1:end]:
            word.append(c, True)
        return end + 1


_DEFAULT = Tokenizer()


def tokenize(text: str) -> list[Token]:
    """Tokenize with a shared Tokenizer instance."""
    return _DEFAULT.tokenize(text)
