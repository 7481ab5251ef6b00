#!/usr/bin/env python3
# termcore/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

This module offers token-aware suggestions for:
- First word of a stage: command names and aliases.
- Word after `<`, `>` or `>>`: filesystem paths.
- Word starting with '-': the command's option names.
- Other words: the command's own completions, falling back to paths.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from termcore.commands import CompletionContext, SessionState

from .errors import TokenizeError
from .parser import looks_like_option
from .tokenizer import Span, Token, TokenKind, Tokenizer

logger = logging.getLogger(__name__)

_REDIRECTS = (TokenKind.REDIRECT_IN, TokenKind.REDIRECT_OUT, TokenKind.REDIRECT_APPEND)


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Candidates for the word under the cursor, which starts at `replace_start`."""
    candidates: tuple[str, ...] = ()
    prefix: str = ""
    replace_start: int = 0

    def __bool__(self) -> bool:
        return bool(self.candidates)


def _split_fallback(text: str) -> list[Token]:
    """On malformed quotes, fall back to whitespace splitting."""
    return [
        Token(TokenKind.WORD, m.group(0), Span(m.start(), m.end() - m.start()))
        for m in re.finditer(r"\S+", text)
    ]


class CompletionEngine:
    def __init__(self, session: SessionState, tokenizer: Tokenizer | None = None) -> None:
        self._session = session
        self._tokenizer = tokenizer or Tokenizer()

    def complete(self, text: str) -> CompletionResult:
        """Return completions for the end of `text` (the text before the cursor)."""
        try:
            tokens = self._tokenizer.tokenize(text)
        except TokenizeError:
            tokens = _split_fallback(text)

        # The word under the cursor is the last token only if it touches the end
        current = ""
        replace_start = len(text)
        if tokens and tokens[-1].kind is TokenKind.WORD and tokens[-1].span.end == len(text):
            current = tokens[-1].value
            replace_start = tokens[-1].span.start
            tokens = tokens[:-1]

        # Only the stage being typed matters
        stage: list[Token] = []
        for token in tokens:
            if token.kind is TokenKind.PIPE:
                stage = []
            else:
                stage.append(token)

        candidates = self._candidates(text, stage, current)
        return CompletionResult(tuple(candidates), current, replace_start)

    def _candidates(self, text: str, stage: list[Token], current: str) -> list[str]:
        if stage and stage[-1].kind in _REDIRECTS:
            return self.complete_path(current)

        words = self._stage_words(stage)
        if not words:
            return self.complete_command_name(current)

        spec = self._session.registry.get(words[0])
        if spec is None:
            return []

        if current.startswith("-"):
            return self.complete_option(words[0], current)

        instance = spec.create()
        context = CompletionContext(
            text=text,
            current=current,
            command_name=spec.name,
            arguments=tuple(w for w in words[1:] if not looks_like_option(w)),
            session=self._session,
        )
        try:
            own = [c for c in instance.get_completions(context) if c.startswith(current)]
        except Exception:
            logger.debug("Completion provider for %s failed", spec.name, exc_info=True)
            own = []
        return sorted(set(own)) if own else self.complete_path(current)

    @staticmethod
    def _stage_words(stage: Iterable[Token]) -> list[str]:
        """Words of the stage with redirect operators and their targets removed."""
        words: list[str] = []
        skip = False
        for token in stage:
            if token.kind is TokenKind.END_OF_OPTIONS:
                continue
            if token.kind in _REDIRECTS:
                skip = True
                continue
            if skip:
                skip = False
                continue
            words.append(token.value)
        return words

    # ---------------- Providers ----------------

    def complete_command_name(self, prefix: str) -> list[str]:
        lowered = prefix.lower()
        return sorted({name for name in self._session.registry.names() if name.startswith(lowered)})

    def complete_option(self, command_name: str, prefix: str) -> list[str]:
        spec = self._session.registry.get(command_name)
        if spec is None:
            return []
        names: list[str] = []
        for descriptor in spec.options:
            names.append(f"--{descriptor.long_name}")
            if descriptor.short_name:
                names.append(f"-{descriptor.short_name}")
        return sorted(n for n in names if n.startswith(prefix))

    def complete_path(self, prefix: str) -> list[str]:
        """Complete `prefix` against the filesystem; directories get a trailing '/'."""
        cut = prefix.rfind("/")
        dir_text = prefix[:cut + 1]
        name_prefix = prefix[cut + 1:]
        base: Path = self._session.resolve(dir_text) if dir_text else self._session.working_directory

        try:
            entries = list(base.iterdir())
        except OSError:
            return []

        results: list[str] = []
        for entry in entries:
            name = entry.name
            if not name.startswith(name_prefix):
                continue
            if name.startswith(".") and not name_prefix.startswith("."):
                continue
            suffix = "/" if entry.is_dir() else ""
            results.append(f"{dir_text}{name}{suffix}")
        return sorted(results)
