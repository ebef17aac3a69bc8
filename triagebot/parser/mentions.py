"""Finding the users and teams mentioned in a piece of Markdown."""

from __future__ import annotations

import re

from .ignore_block import IgnoreBlocks

_MENTION = re.compile(r"(?<![A-Za-z])@([A-Za-z0-9_\-]*(?:/[A-Za-z0-9_\-]*)?)")


def get_mentions(text: str) -> list[str]:
    """Return the names mentioned with ``@``, without the ``@``.

    Mentions inside code or block quotes are skipped, as are ``@`` signs
    directly preceded by an ASCII letter (such as in e-mail addresses).
    """
    ignore = IgnoreBlocks(text)
    mentions = []
    for match in _MENTION.finditer(text):
        username = match.group(1)
        if not username:
            continue
        at = match.start()
        if ignore.overlaps_ignore(at, at + len(username)) is not None:
            continue
        mentions.append(username)
    return mentions