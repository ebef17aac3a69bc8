"""Parser for the note command.

Grammar::

    Command: `@bot note <title>` or `@bot note remove <title>`.

The title is a single word or a quoted string.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..token import Token, TokenKind, Tokenizer

_TITLE_KINDS = frozenset({TokenKind.WORD, TokenKind.QUOTE})


class ParseError(Enum):
    MISSING_TITLE = "missing required summary title"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NoteCommand:
    """Add a summary note titled ``title``, or remove it when ``remove`` is set."""

    title: str
    remove: bool = False


def parse(tokenizer: Tokenizer) -> NoteCommand | None:
    """Parse ``note [remove]* <title>``.

    The tokenizer handed in is left where it was, even on success.
    """
    toks = tokenizer.copy()
    if toks.peek_token() != Token(TokenKind.WORD, "note"):
        return None
    toks.next_token()
    remove = False
    while True:
        token = toks.next_token()
        if token is None or token.kind not in _TITLE_KINDS:
            raise toks.error(ParseError.MISSING_TITLE)
        if token.kind is TokenKind.WORD and token.text == "remove":
            remove = True
            continue
        return NoteCommand(token.text, remove)