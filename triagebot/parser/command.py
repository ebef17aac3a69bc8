"""Finding and parsing bot commands in a comment."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .commands import assign, glacier, nominate, note, ping, relabel, shortcut, simple
from .error import CommandError
from .ignore_block import IgnoreBlocks
from .token import Tokenizer

log = logging.getLogger(__name__)


class CommandKind(Enum):
    RELABEL = auto()
    ASSIGN = auto()
    PING = auto()
    NOMINATE = auto()
    PRIORITIZE = auto()
    SECOND = auto()
    GLACIER = auto()
    SHORTCUT = auto()
    CLOSE = auto()
    NOTE = auto()


@dataclass(frozen=True)
class Command:
    """A recognised command: its parsed value, or the error raised parsing it."""

    kind: CommandKind
    result: Any

    def is_ok(self) -> bool:
        return not isinstance(self.result, CommandError)

    def is_err(self) -> bool:
        return not self.is_ok()


_Parser = Callable[[Tokenizer], Any]

_PARSERS: tuple[tuple[_Parser, CommandKind], ...] = (
    (relabel.parse, CommandKind.RELABEL),
    (assign.parse, CommandKind.ASSIGN),
    (note.parse, CommandKind.NOTE),
    (ping.parse, CommandKind.PING),
    (nominate.parse, CommandKind.NOMINATE),
    (simple.parse_prioritize, CommandKind.PRIORITIZE),
    (simple.parse_second, CommandKind.SECOND),
    (glacier.parse, CommandKind.GLACIER),
    (shortcut.parse, CommandKind.SHORTCUT),
    (simple.parse_close, CommandKind.CLOSE),
)


def _parse_single(
    parser: _Parser, kind: CommandKind, tokenizer: Tokenizer
) -> tuple[Tokenizer, Command] | None:
    tok = tokenizer.copy()
    try:
        value = parser(tok)
    except CommandError as err:
        value = err
    log.info("parsed %s command: %r", kind.name, value)
    if value is None:
        return None
    return tok, Command(kind, value)


class Input:
    """Iterates over the commands addressed to any of ``bots`` in ``text``.

    Commands are introduced by ``@<bot>`` or by ``r?``; those inside code or
    block quotes are skipped.
    """

    def __init__(self, text: str, bots: Iterable[str]) -> None:
        self.text = text
        self._parsed = 0
        self._ignore = IgnoreBlocks(text)
        alternatives = [r"(?P<review>\br\?)"]
        alternatives.extend(rf"(?:@{re.escape(bot)}\b)" for bot in bots)
        self._bot_re = re.compile("|".join(alternatives), re.IGNORECASE)

    def remaining(self) -> str:
        """The text not yet consumed."""
        return self.text[self._parsed :]

    def __iter__(self) -> Iterator[Command]:
        return self

    def __next__(self) -> Command:
        while True:
            match = self._bot_re.search(self.remaining())
            if match is None:
                raise StopIteration
            start = self._parsed + match.start()
            end = self._parsed + match.end()
            if self._ignore.overlaps_ignore(start, end) is not None:
                log.info("command overlaps ignored block; ignore: %r", self._ignore)
                self._parsed = end
                continue
            self._parsed = end
            if match.group("review") is not None:
                command = self._parse_review()
            else:
                command = self._parse_command()
            if command is not None:
                return command

    def _parse_command(self) -> Command | None:
        original = Tokenizer(self.remaining())
        log.info("identified potential command")
        success = [
            found
            for parser, kind in _PARSERS
            if (found := _parse_single(parser, kind, original)) is not None
        ]
        if len(success) > 1:
            raise RuntimeError(
                f"succeeded parsing {self.remaining()!r} to multiple commands: "
                f"{[command for _, command in success]!r}"
            )
        if not success:
            return None
        tok, command = success[0]
        # A command that failed to parse does not move the input forwards.
        if command.is_ok():
            self._parsed += tok.position()
        return command

    def _parse_review(self) -> Command | None:
        found = _parse_single(assign.parse_review, CommandKind.ASSIGN, Tokenizer(self.remaining()))
        if found is None:
            log.warning("expected r? parser to return something: %r", self.text)
            return None
        tok, command = found
        self._parsed += tok.position()
        return command