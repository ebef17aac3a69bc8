"""Parser for the ping command: ``@bot ping <team>``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..token import Token, TokenKind, Tokenizer

_ENDS = frozenset({TokenKind.DOT, TokenKind.END_OF_LINE})


class ParseError(Enum):
    EXPECTED_END = "expected end of command"
    NO_TEAM = "no team specified"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PingCommand:
    team: str


def parse(tokenizer: Tokenizer) -> PingCommand | None:
    """Parse ``ping <team>``, advancing ``tokenizer`` on success."""
    toks = tokenizer.copy()
    if toks.peek_token() != Token(TokenKind.WORD, "ping"):
        return None
    toks.next_token()
    token = toks.next_token()
    if token is None or token.kind is not TokenKind.WORD:
        raise toks.error(ParseError.NO_TEAM)
    following = toks.peek_token()
    if following is None or following.kind not in _ENDS:
        raise toks.error(ParseError.EXPECTED_END)
    toks.next_token()
    tokenizer._adopt(toks)
    return PingCommand(token.text)