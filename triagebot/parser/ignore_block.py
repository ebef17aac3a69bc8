"""Regions of Markdown text (code and quotes) in which commands are ignored."""

from __future__ import annotations

import re
import string
from collections.abc import Iterator

from markdown_it import MarkdownIt

_NEWLINE = re.compile(r"\r\n|\r|\n")
_MARKDOWN = MarkdownIt("commonmark")
_PUNCTUATION = frozenset(string.punctuation)


def _line_starts(text: str) -> list[int]:
    """Start offset of each line, followed by the length of the text."""
    starts = [0]
    starts.extend(m.end() for m in _NEWLINE.finditer(text))
    if starts[-1] != len(text):
        starts.append(len(text))
    return starts


def _closing_run(text: str, pos: int, end: int, width: int) -> int | None:
    """End offset of the next backtick run of exactly ``width``, if any."""
    while pos < end:
        if text[pos] != "`":
            pos += 1
            continue
        run_end = pos
        while run_end < end and text[run_end] == "`":
            run_end += 1
        if run_end - pos == width:
            return run_end
        pos = run_end
    return None


def _code_spans(text: str, start: int, end: int) -> Iterator[tuple[int, int]]:
    pos = start
    while pos < end:
        ch = text[pos]
        if ch == "\\" and pos + 1 < end and text[pos + 1] in _PUNCTUATION:
            pos += 2
            continue
        if ch != "`":
            pos += 1
            continue
        run_end = pos
        while run_end < end and text[run_end] == "`":
            run_end += 1
        close = _closing_run(text, run_end, end, run_end - pos)
        if close is None:
            pos = run_end
            continue
        yield pos, close
        pos = close


def _indent_width(line: str) -> int:
    """Number of characters making up up to four columns of indentation."""
    count = column = 0
    for ch in line:
        if column >= 4:
            break
        if ch == " ":
            column += 1
        elif ch == "\t":
            column = 4
        else:
            break
        count += 1
    return count


class IgnoreBlocks:
    """Offsets of code blocks, inline code and block quotes in a document."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._starts = _line_starts(text)
        self._ranges = list(self._scan())

    @property
    def ranges(self) -> tuple[tuple[int, int], ...]:
        return tuple(self._ranges)

    def _line(self, index: int) -> str:
        return self._text[self._starts[index] : self._starts[index + 1]].rstrip("\r\n")

    def _scan(self) -> Iterator[tuple[int, int]]:
        quote_depth = 0
        for token in _MARKDOWN.parse(self._text):
            if token.type == "blockquote_close":
                quote_depth -= 1
                continue
            if token.type == "blockquote_open":
                if quote_depth == 0 and token.map is not None:
                    yield self._blockquote(token.map)
                quote_depth += 1
                continue
            if quote_depth or token.map is None:
                continue
            if token.type == "fence":
                yield self._fence(token.map, token.markup)
            elif token.type == "code_block":
                first, last = token.map
                start = self._starts[first] + _indent_width(self._line(first))
                yield start, self._starts[last]
            elif token.type == "inline":
                first, last = token.map
                yield from _code_spans(self._text, self._starts[first], self._starts[last])

    def _blockquote(self, lines: list[int]) -> tuple[int, int]:
        first, last = lines
        line_start = self._starts[first]
        marker = self._text.find(">", line_start)
        start = marker if marker != -1 else line_start
        return start, self._starts[last]

    def _fence(self, lines: list[int], markup: str) -> tuple[int, int]:
        first, last = lines
        line_start = self._starts[first]
        marker = self._text.find(markup, line_start)
        start = marker if marker != -1 else line_start
        closing = self._line(last - 1).strip() if last - 1 > first else ""
        if len(closing) >= len(markup) and set(closing) == {markup[0]}:
            return start, self._starts[last - 1] + len(self._line(last - 1))
        return start, self._starts[last]

    def overlaps_ignore(self, start: int, end: int) -> tuple[int, int] | None:
        """Return the first ignored range touching ``start..end``, if any."""
        for ignore_start, ignore_end in self._ranges:
            if ignore_start <= end and start <= ignore_end:
                return ignore_start, ignore_end
        return None

    def __repr__(self) -> str:
        return f"IgnoreBlocks({self._ranges!r})"