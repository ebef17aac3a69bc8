"""Parser for the glacier command: ``@bot glacier "<gist url>"``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..token import Token, TokenKind, Tokenizer

_GIST_PREFIX = "https://gist.github.com/"


class ParseError(Enum):
    NO_LINK = "no link provided - did you forget the quotes around it?"
    INVALID_LINK = "invalid link - must be from a playground gist"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GlacierCommand:
    source: str


def parse(tokenizer: Tokenizer) -> GlacierCommand | None:
    """Parse ``glacier`` followed by a quoted gist link."""
    toks = tokenizer.copy()
    if toks.peek_token() != Token(TokenKind.WORD, "glacier"):
        return None
    toks.next_token()
    link = toks.next_token()
    if link is not None and link.kind is TokenKind.QUOTE:
        if link.text.startswith(_GIST_PREFIX):
            return GlacierCommand(link.text)
        raise toks.error(ParseError.INVALID_LINK)
    if link is not None and link.kind is TokenKind.WORD:
        raise toks.error(ParseError.INVALID_LINK)
    raise toks.error(ParseError.NO_LINK)