"""Tokenizer for the text that follows a bot mention."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .error import CommandError


class TokenKind(Enum):
    DOT = auto()
    COMMA = auto()
    SEMI = auto()
    EXCLAMATION = auto()
    QUESTION = auto()
    COLON = auto()
    END_OF_LINE = auto()
    PAREN_LEFT = auto()
    PAREN_RIGHT = auto()
    QUOTE = auto()
    WORD = auto()


_PUNCT = {
    ".": TokenKind.DOT,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "!": TokenKind.EXCLAMATION,
    "?": TokenKind.QUESTION,
    ";": TokenKind.SEMI,
    "\n": TokenKind.END_OF_LINE,
    ")": TokenKind.PAREN_RIGHT,
    "(": TokenKind.PAREN_LEFT,
}

_PUNCT_TEXT = {kind: ch for ch, kind in _PUNCT.items()}
_PUNCT_TEXT[TokenKind.END_OF_LINE] = ""


@dataclass(frozen=True)
class Token:
    """A token; ``text`` is set for words and quoted strings only."""

    kind: TokenKind
    text: str = ""

    def __str__(self) -> str:
        if self.kind is TokenKind.QUOTE:
            return f'"{self.text}"'
        if self.kind is TokenKind.WORD:
            return self.text
        return _PUNCT_TEXT[self.kind]


class TokenizerErrorKind(Enum):
    UNTERMINATED_STRING = "unterminated string"
    QUOTE_IN_WORD = "quote in word"
    RAW_STRING = "raw strings are not yet supported"

    def __str__(self) -> str:
        return self.value


class Tokenizer:
    """Splits input into words, quoted strings and punctuation."""

    def __init__(self, input: str) -> None:
        self.input = input
        self._pos = 0
        self._end_emitted = False

    def copy(self) -> Tokenizer:
        """Return an independent tokenizer at the same point."""
        clone = Tokenizer(self.input)
        clone._adopt(self)
        return clone

    def _adopt(self, other: Tokenizer) -> None:
        """Take over the state of another tokenizer over the same input."""
        self._pos = other._pos
        self._end_emitted = other._end_emitted

    def error(self, source: Any) -> CommandError:
        """Build an error located at the current position."""
        return CommandError(self.input, self._pos, source)

    def position(self) -> int:
        return self._pos

    def _cur(self) -> str | None:
        return self.input[self._pos] if self._pos < len(self.input) else None

    def _consume_whitespace(self) -> None:
        while (ch := self._cur()) is not None and ch != "\n" and ch.isspace():
            self._pos += 1

    def _consume_string(self) -> Token | None:
        if self._cur() != '"':
            return None
        self._pos += 1
        start = self._pos
        end = self.input.find('"', start)
        if end == -1:
            self._pos = len(self.input)
            raise self.error(TokenizerErrorKind.UNTERMINATED_STRING)
        self._pos = end + 1
        return Token(TokenKind.QUOTE, self.input[start:end])

    def peek_token(self) -> Token | None:
        """Return the next token without consuming it."""
        return self.copy().next_token()

    def next_token(self) -> Token | None:
        """Consume and return the next token, or None once input is exhausted.

        The end of the input yields one END_OF_LINE token before None.
        """
        self._consume_whitespace()
        ch = self._cur()
        if ch is None:
            if self._end_emitted:
                return None
            self._end_emitted = True
            return Token(TokenKind.END_OF_LINE)
        if ch in _PUNCT:
            self._pos += 1
            return Token(_PUNCT[ch])
        quoted = self._consume_string()
        if quoted is not None:
            return quoted

        start = self._pos
        while (ch := self._cur()) is not None and ch not in _PUNCT and not ch.isspace():
            if ch == '"':
                so_far = self.input[start : self._pos]
                if so_far.startswith("r") and all(c in '#"' for c in so_far[1:]):
                    raise self.error(TokenizerErrorKind.RAW_STRING)
                raise self.error(TokenizerErrorKind.QUOTE_IN_WORD)
            self._pos += 1
        return Token(TokenKind.WORD, self.input[start : self._pos])

    def eat_token(self, token: Token) -> bool:
        """Consume the next token if it equals ``token``; report whether it did."""
        if self.peek_token() == token:
            self.next_token()
            return True
        return False


def tokenize(input: str) -> list[Token]:
    """Tokenize all of ``input``."""
    tokenizer = Tokenizer(input)
    tokens = []
    while (token := tokenizer.next_token()) is not None:
        tokens.append(token)
    return tokens