"""Parsers for the single-word commands ``close``, ``prioritize`` and ``second``.

These only look at the next word and never advance the tokenizer.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..token import Token, TokenKind, Tokenizer


@dataclass(frozen=True)
class CloseCommand:
    """Close the issue."""


@dataclass(frozen=True)
class PrioritizeCommand:
    """Request prioritization."""


@dataclass(frozen=True)
class SecondCommand:
    """Second a major change proposal."""


def _next_word(tokenizer: Tokenizer) -> str | None:
    token = tokenizer.peek_token()
    if token is None or token.kind is not TokenKind.WORD:
        return None
    return token.text


def parse_close(tokenizer: Tokenizer) -> CloseCommand | None:
    if tokenizer.peek_token() == Token(TokenKind.WORD, "close"):
        return CloseCommand()
    return None


def parse_prioritize(tokenizer: Tokenizer) -> PrioritizeCommand | None:
    if tokenizer.peek_token() == Token(TokenKind.WORD, "prioritize"):
        return PrioritizeCommand()
    return None


def parse_second(tokenizer: Tokenizer) -> SecondCommand | None:
    if _next_word(tokenizer) in ("second", "seconded"):
        return SecondCommand()
    return None