"""The error raised when a bot command cannot be parsed."""

from __future__ import annotations

from typing import Any

_CONTEXT = 10


class CommandError(Exception):
    """A parse failure at ``position`` of ``input``, caused by ``source``.

    Two errors compare equal when they refer to the same input and position,
    whatever their source.
    """

    def __init__(self, input: str, position: int, source: Any) -> None:
        super().__init__(input, position, source)
        self.input = input
        self.position = position
        self.source = source

    def __str__(self) -> str:
        before = self.input[max(0, self.position - _CONTEXT) : self.position]
        after = self.input[self.position : min(len(self.input), self.position + _CONTEXT)]
        return f"...'{before}' | error: {self.source} at >| '{after}'..."

    def __repr__(self) -> str:
        return (
            f"CommandError(input={self.input!r}, position={self.position!r}, "
            f"source={self.source!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandError):
            return NotImplemented
        return self.input == other.input and self.position == other.position

    def __hash__(self) -> int:
        return hash((self.input, self.position))