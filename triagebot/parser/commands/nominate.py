"""Parser for the nomination commands.

Grammar::

    Command:
    `@bot beta-nominate <team>`.
    `@bot nominate <team>`.
    `@bot beta-accept`.
    `@bot beta-approve`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from ..token import TokenKind, Tokenizer

_ENDS = frozenset({TokenKind.DOT, TokenKind.END_OF_LINE})


class ParseError(Enum):
    EXPECTED_END = "expected end of command"
    NO_TEAM = "no team specified"

    def __str__(self) -> str:
        return self.value


class Style(Enum):
    BETA = auto()
    BETA_APPROVE = auto()
    DECISION = auto()


_STYLES = {
    "beta-nominate": Style.BETA,
    "nominate": Style.DECISION,
    "beta-accept": Style.BETA_APPROVE,
    "beta-approve": Style.BETA_APPROVE,
}


@dataclass(frozen=True)
class NominateCommand:
    team: str
    style: Style


def parse(tokenizer: Tokenizer) -> NominateCommand | None:
    """Parse a nomination command, advancing ``tokenizer`` on success."""
    toks = tokenizer.copy()
    first = toks.peek_token()
    if first is None or first.kind is not TokenKind.WORD or first.text not in _STYLES:
        return None
    style = _STYLES[first.text]
    toks.next_token()
    team = ""
    if style is not Style.BETA_APPROVE:
        token = toks.next_token()
        if token is None or token.kind is not TokenKind.WORD:
            raise toks.error(ParseError.NO_TEAM)
        team = token.text
    following = toks.peek_token()
    if following is None or following.kind not in _ENDS:
        raise toks.error(ParseError.EXPECTED_END)
    toks.next_token()
    tokenizer._adopt(toks)
    return NominateCommand(team, style)