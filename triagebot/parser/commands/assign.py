"""Parser for the assignment commands.

Grammar::

    Command: `@bot claim`, `@bot release-assignment`, or `@bot assign @user`.

The ``r?`` review request is parsed by :func:`parse_review`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..error import CommandError
from ..token import Token, TokenKind, Tokenizer

_ENDS = frozenset({TokenKind.DOT, TokenKind.END_OF_LINE})


class ParseError(Enum):
    EXPECTED_END = "expected end of command"
    MENTION_USER = "user should start with @"
    NO_USER = "specify user to assign to"

    def __str__(self) -> str:
        return self.value


class AssignCommand:
    """Base of the assignment commands."""


@dataclass(frozen=True)
class AssignOwn(AssignCommand):
    """Assign the commenter."""


@dataclass(frozen=True)
class AssignRelease(AssignCommand):
    """Release the current assignment."""


@dataclass(frozen=True)
class AssignUser(AssignCommand):
    username: str


@dataclass(frozen=True)
class ReviewName(AssignCommand):
    name: str


def _word(text: str) -> Token:
    return Token(TokenKind.WORD, text)


def _finish(tokenizer: Tokenizer, toks: Tokenizer, command: AssignCommand) -> AssignCommand:
    following = toks.peek_token()
    if following is None or following.kind not in _ENDS:
        raise toks.error(ParseError.EXPECTED_END)
    toks.next_token()
    tokenizer._adopt(toks)
    return command


def parse(tokenizer: Tokenizer) -> AssignCommand | None:
    """Parse ``claim``, ``release-assignment`` or ``assign @user``."""
    toks = tokenizer.copy()
    first = toks.peek_token()
    if first == _word("claim"):
        toks.next_token()
        return _finish(tokenizer, toks, AssignOwn())
    if first == _word("assign"):
        toks.next_token()
        user = toks.next_token()
        if user is None or user.kind is not TokenKind.WORD:
            raise toks.error(ParseError.NO_USER)
        if user.text.startswith("@") and len(user.text) != 1:
            return AssignUser(user.text[1:])
        raise toks.error(ParseError.MENTION_USER)
    if first == _word("release-assignment"):
        toks.next_token()
        return _finish(tokenizer, toks, AssignRelease())
    return None


def parse_review(tokenizer: Tokenizer) -> ReviewName:
    """Parse the name following ``r?``."""
    try:
        token = tokenizer.next_token()
    except CommandError:
        token = None
    if token is None or token.kind is not TokenKind.WORD:
        raise tokenizer.error(ParseError.NO_USER)
    name = token.text.removeprefix("@")
    if not name:
        raise tokenizer.error(ParseError.NO_USER)
    return ReviewName(name)