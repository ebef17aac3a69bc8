"""Parser for the shortcut commands: ``ready``/``review``, ``author``, ``blocked``."""

from __future__ import annotations

from enum import Enum, auto

from ..token import TokenKind, Tokenizer


class ShortcutCommand(Enum):
    READY = auto()
    AUTHOR = auto()
    BLOCKED = auto()


_SHORTCUTS = {
    "ready": ShortcutCommand.READY,
    "review": ShortcutCommand.READY,
    "reviewer": ShortcutCommand.READY,
    "author": ShortcutCommand.AUTHOR,
    "blocked": ShortcutCommand.BLOCKED,
}


def parse(tokenizer: Tokenizer) -> ShortcutCommand | None:
    """Parse a shortcut word, advancing ``tokenizer`` past it on success."""
    toks = tokenizer.copy()
    token = toks.peek_token()
    if token is None or token.kind is not TokenKind.WORD:
        return None
    command = _SHORTCUTS.get(token.text)
    if command is None:
        return None
    toks.next_token()
    tokenizer._adopt(toks)
    return command