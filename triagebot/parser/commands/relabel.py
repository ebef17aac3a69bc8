"""Parser for the label command.

Grammar::

    Command: `@bot modify? <label-w> to? :? <label-list>.`

    <label-w>: label | labels
    <label-list>: <label-delta> ([, and]? <label-delta>)*
    <label-delta>: +<label> | -<label> | <label>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..token import Token, TokenKind, Tokenizer

_TERMINATORS = frozenset({TokenKind.SEMI, TokenKind.DOT, TokenKind.END_OF_LINE})


class ParseError(Enum):
    EMPTY_LABEL = "empty label"
    EXPECTED_LABEL_DELTA = "a label delta"
    MISLEADING_TO = "forbidden `to`, use `+to`"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LabelDelta:
    """A label to add, or to remove when ``add`` is false."""

    label: str
    add: bool = True


@dataclass(frozen=True)
class RelabelCommand:
    deltas: tuple[LabelDelta, ...]


def _word(text: str) -> Token:
    return Token(TokenKind.WORD, text)


def parse_delta(tokenizer: Tokenizer) -> LabelDelta:
    """Parse a single ``+label``, ``-label`` or ``label``."""
    token = tokenizer.peek_token()
    if token is None or token.kind is not TokenKind.WORD:
        raise tokenizer.error(ParseError.EXPECTED_LABEL_DELTA)
    tokenizer.next_token()
    delta = token.text
    add = True
    if delta.startswith("+"):
        delta = delta[1:]
    elif delta.startswith("-"):
        delta = delta[1:]
        add = False
    if not delta:
        raise tokenizer.error(ParseError.EMPTY_LABEL)
    return LabelDelta(delta, add)


def parse(tokenizer: Tokenizer) -> RelabelCommand | None:
    """Parse a label command, advancing ``tokenizer`` past it on success."""
    toks = tokenizer.copy()
    toks.eat_token(_word("modify"))
    if not (toks.eat_token(_word("labels")) or toks.eat_token(_word("label"))):
        return None
    toks.eat_token(_word("to"))
    toks.eat_token(Token(TokenKind.COLON))

    if toks.peek_token() == _word("to"):
        raise toks.error(ParseError.MISLEADING_TO)

    deltas = []
    while True:
        deltas.append(parse_delta(toks))
        toks.eat_token(Token(TokenKind.COMMA))
        toks.eat_token(_word("and"))
        following = toks.peek_token()
        if following is not None and following.kind in _TERMINATORS:
            toks.next_token()
            tokenizer._adopt(toks)
            return RelabelCommand(tuple(deltas))