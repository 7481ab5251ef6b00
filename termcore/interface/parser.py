#!/usr/bin/env python3
# termcore/interface/parser.py
from __future__ import annotations

"""
Structural parsing of a token stream into a pipeline.

Responsibilities:
- Split the token stream into stages at `|`.
- Collect each stage's command name, positional arguments and raw option occurrences.
- Collect `<`, `>` and `>>` redirections and reject a pipe after a stdout redirect.

No command knowledge is needed here; option names are matched later by the binder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .errors import ParseError
from .tokenizer import Token, TokenKind, Tokenizer


class RedirectMode(Enum):
    OVERWRITE = "overwrite"
    APPEND = "append"


@dataclass(frozen=True, slots=True)
class ParsedOption:
    """
    One `-x`, `-x=v`, `--name` or `--name=v` occurrence.

    `separate` is True when the value was taken from the following token
    (`-n 5`); `positional_index` then records where that token would have
    landed among the positional arguments.
    """
    name: str
    is_long: bool
    has_value: bool = False
    raw_value: str | None = None
    value_protected: tuple[bool, ...] = ()
    separate: bool = False
    positional_index: int = -1

    @property
    def display_name(self) -> str:
        return f"--{self.name}" if self.is_long else f"-{self.name}"


@dataclass(frozen=True, slots=True)
class Redirections:
    stdin_path: str | None = None
    stdout_path: str | None = None
    stdout_mode: RedirectMode = RedirectMode.OVERWRITE

    @property
    def has_stdout(self) -> bool:
        return self.stdout_path is not None


@dataclass(slots=True)
class ParsedCommand:
    command_name: str
    positional_arguments: list[str] = field(default_factory=list)
    options: list[ParsedOption] = field(default_factory=list)
    redirections: Redirections = field(default_factory=Redirections)


@dataclass(slots=True)
class Pipeline:
    commands: list[ParsedCommand] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.commands

    def __len__(self) -> int:
        return len(self.commands)


def looks_like_option(text: str) -> bool:
    """A word is an option when it starts with '-', is longer than one char and the second char is not a digit."""
    if len(text) < 2 or not text.startswith("-"):
        return False
    if text == "--":
        return False
    return not text[1].isdigit()


class _StageBuilder:
    """Accumulates one stage while walking its tokens."""

    def __init__(self) -> None:
        self.name: str | None = None
        self.positionals: list[str] = []
        self.options: list[ParsedOption] = []
        self.stdin_path: str | None = None
        self.stdout_path: str | None = None
        self.stdout_mode = RedirectMode.OVERWRITE
        self.end_of_options = False
        self.token_count = 0

    def build(self) -> ParsedCommand:
        if self.name is None:
            raise ParseError("Command name is missing")
        return ParsedCommand(
            command_name=self.name,
            positional_arguments=self.positionals,
            options=self.options,
            redirections=Redirections(self.stdin_path, self.stdout_path, self.stdout_mode),
        )


class Parser:
    """Turns text (or tokens) into a Pipeline."""

    def __init__(self, tokenizer: Tokenizer | None = None) -> None:
        self._tokenizer = tokenizer or Tokenizer()

    def parse(self, text: str) -> Pipeline:
        return self.parse_tokens(self._tokenizer.tokenize(text))

    def parse_tokens(self, tokens: Sequence[Token]) -> Pipeline:
        pipeline = Pipeline()
        if not tokens:
            return pipeline

        stage = _StageBuilder()
        i = 0
        n = len(tokens)
        while i < n:
            token = tokens[i]

            if token.kind is TokenKind.PIPE:
                if stage.token_count == 0:
                    raise ParseError("Empty command before pipe")
                if stage.stdout_path is not None:
                    raise ParseError("Cannot use pipe after stdout redirection (>)")
                pipeline.commands.append(stage.build())
                stage = _StageBuilder()
                i += 1
                continue

            stage.token_count += 1

            if token.kind is TokenKind.REDIRECT_IN:
                stage.stdin_path = self._redirect_path(tokens, i, "<")
                i += 2
                continue

            if token.kind in (TokenKind.REDIRECT_OUT, TokenKind.REDIRECT_APPEND):
                symbol = ">" if token.kind is TokenKind.REDIRECT_OUT else ">>"
                stage.stdout_path = self._redirect_path(tokens, i, symbol)
                stage.stdout_mode = (RedirectMode.OVERWRITE if token.kind is TokenKind.REDIRECT_OUT
                                     else RedirectMode.APPEND)
                i += 2
                continue

            if token.kind is TokenKind.END_OF_OPTIONS:
                if stage.name is None:
                    stage.name = token.value
                elif stage.end_of_options:
                    stage.positionals.append(token.value)
                else:
                    stage.end_of_options = True
                i += 1
                continue

            i += self._word(tokens, i, stage)

        if stage.token_count == 0:
            raise ParseError("Empty command after pipe")
        pipeline.commands.append(stage.build())
        return pipeline

    # ---------------- Stage contents ----------------

    @staticmethod
    def _redirect_path(tokens: Sequence[Token], i: int, symbol: str) -> str:
        if i + 1 >= len(tokens) or tokens[i + 1].kind is not TokenKind.WORD:
            raise ParseError(f"Expected file path after {symbol}")
        return tokens[i + 1].value

    def _word(self, tokens: Sequence[Token], i: int, stage: _StageBuilder) -> int:
        """Handle a WORD token; return how many tokens were consumed."""
        token = tokens[i]

        if stage.name is None:
            stage.name = token.value
            return 1

        if stage.end_of_options or not looks_like_option(token.value):
            stage.positionals.append(token.value)
            return 1

        if token.value.startswith("--"):
            options = [self._long_option(token)]
        else:
            options = self._short_options(token)

        consumed = 1
        last = options[-1]
        if len(options) == 1 and not last.has_value and i + 1 < len(tokens):
            following = tokens[i + 1]
            if following.kind is TokenKind.WORD and not looks_like_option(following.value):
                options[-1] = ParsedOption(
                    name=last.name,
                    is_long=last.is_long,
                    has_value=True,
                    raw_value=following.value,
                    value_protected=following.protected,
                    separate=True,
                    positional_index=len(stage.positionals),
                )
                consumed = 2

        stage.options.extend(options)
        return consumed

    @staticmethod
    def _long_option(token: Token) -> ParsedOption:
        body = token.value[2:]
        eq = body.find("=")
        if eq < 0:
            return ParsedOption(name=body, is_long=True)
        if eq == 0:
            raise ParseError("Invalid option format: --=")
        return ParsedOption(
            name=body[:eq],
            is_long=True,
            has_value=True,
            raw_value=body[eq + 1:],
            value_protected=token.protected[eq + 3:],
        )

    @staticmethod
    def _short_options(token: Token) -> list[ParsedOption]:
        body = token.value[1:]
        eq = body.find("=")
        if eq == 0:
            raise ParseError("Invalid option format: -=")
        if eq < 0:
            return [ParsedOption(name=ch, is_long=False) for ch in body]

        names = body[:eq]
        options = [ParsedOption(name=ch, is_long=False) for ch in names[:-1]]
        options.append(ParsedOption(
            name=names[-1],
            is_long=False,
            has_value=True,
            raw_value=body[eq + 1:],
            value_protected=token.protected[eq + 2:],
        ))
        return options


_DEFAULT = Parser()


def parse(text: str) -> Pipeline:
    """Parse with a shared Parser instance."""
    return _DEFAULT.parse(text)
