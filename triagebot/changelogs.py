"""Splitting a changelog into per-version release notes."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

log = logging.getLogger(__name__)

_MARKDOWN = MarkdownIt("commonmark")
_ALWAYS_ESCAPED = frozenset("*_[]#<>\\`")
_ORDERED_START = re.compile(r"^(\d+)([.)])(\s|$)")


class ChangelogFormat(Enum):
    """The layouts of changelog that can be split into versions."""

    RUSTC = "rustc"


@dataclass
class Changelog:
    """Release notes, rendered as Markdown, keyed by version."""

    versions: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, format: ChangelogFormat | str, content: str) -> Changelog:
        """Parse ``content`` laid out in ``format``."""
        if ChangelogFormat(format) is ChangelogFormat.RUSTC:
            return cls(_parse_rustc(content))
        raise ValueError(f"unsupported changelog format: {format!r}")

    def version(self, version: str) -> str | None:
        """The notes for ``version``, or None if it is not in the changelog."""
        return self.versions.get(version)


def _parse_rustc(content: str) -> dict[str, str]:
    """Split on level-one headings; the second word of each heading is the version."""
    root = SyntaxTreeNode(_MARKDOWN.parse(content))
    versions: dict[str, str] = {}
    current: str | None = None
    section: list[SyntaxTreeNode] = []
    for child in root.children:
        if child.type == "heading" and child.tag == "h1":
            if current is not None:
                _store_version(versions, current, section)
            current = child.children[0].content if child.children else ""
            section = []
        else:
            section.append(child)
    if current is not None:
        _store_version(versions, current, section)
    return versions


def _store_version(versions: dict[str, str], heading: str, body: list[SyntaxTreeNode]) -> None:
    content = _render_for_github_releases(body)
    words = heading.split(" ")
    if len(words) > 1:
        versions[words[1]] = content
    else:
        log.warning("skipped version, invalid header: %s", heading)


def _render_for_github_releases(nodes: Iterable[SyntaxTreeNode]) -> str:
    """Render blocks back to CommonMark without wrapping lines.

    GitHub Releases turn every line break into ``<br>``, so soft breaks are
    joined into single lines and reference links are written inline.
    """
    rendered = _render_blocks(nodes)
    return rendered + "\n" if rendered else ""


def _render_blocks(nodes: Iterable[SyntaxTreeNode], separator: str = "\n\n") -> str:
    return separator.join(_render_block(node) for node in nodes)


def _render_block(node: SyntaxTreeNode) -> str:
    kind = node.type
    if kind == "paragraph":
        return _render_inline_container(node)
    if kind == "heading":
        return "#" * int(node.tag[1:]) + " " + _render_inline_container(node)
    if kind in ("bullet_list", "ordered_list"):
        return _render_list(node)
    if kind == "blockquote":
        inner = _render_blocks(node.children)
        return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
    if kind == "fence":
        return _render_fence(node)
    if kind == "code_block":
        lines = node.content.rstrip("\n").split("\n")
        return "\n".join(f"    {line}" if line else "" for line in lines)
    if kind == "hr":
        return "-----"
    return node.content.rstrip("\n")


def _render_fence(node: SyntaxTreeNode) -> str:
    content = node.content
    longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
    fence = "`" * max(3, longest + 1)
    if content and not content.endswith("\n"):
        content += "\n"
    return f"{fence}{node.info}\n{content}{fence}"


def _render_list(node: SyntaxTreeNode) -> str:
    ordered = node.type == "ordered_list"
    paragraphs = [c for item in node.children for c in item.children if c.type == "paragraph"]
    tight = all(p.hidden for p in paragraphs)
    separator = "\n" if tight else "\n\n"
    number = int(node.attrs.get("start", 1)) if ordered else 0
    delimiter = node.markup if node.markup in (".", ")") else "."
    items = []
    for item in node.children:
        marker = f"{number}{delimiter} " if ordered else "- "
        number += 1
        body = _render_blocks(item.children, separator)
        items.append(_indent_item(marker, body))
    return separator.join(items)


def _indent_item(marker: str, body: str) -> str:
    first, *rest = body.split("\n")
    pad = " " * len(marker)
    lines = [marker + first if first else marker.rstrip()]
    lines.extend(pad + line if line else "" for line in rest)
    return "\n".join(lines)


def _render_inline_container(node: SyntaxTreeNode) -> str:
    if not node.children:
        return ""
    return _render_inlines(node.children[0].children, at_start=True)


def _render_inlines(nodes: Iterable[SyntaxTreeNode], at_start: bool = False) -> str:
    return "".join(
        _render_inline(node, at_start and index == 0) for index, node in enumerate(nodes)
    )


def _render_inline(node: SyntaxTreeNode, at_start: bool) -> str:
    kind = node.type
    if kind == "text":
        return _escape(node.content, at_start)
    if kind == "softbreak":
        return " "
    if kind == "hardbreak":
        return "\\\n"
    if kind == "code_inline":
        return _code_span(node.content)
    if kind == "em":
        return f"*{_render_inlines(node.children)}*"
    if kind == "strong":
        return f"**{_render_inlines(node.children)}**"
    if kind == "link":
        href = str(node.attrs.get("href", ""))
        if node.markup == "autolink":
            return "<" + "".join(child.content for child in node.children) + ">"
        text = _render_inlines(node.children)
        return f"[{text}]({_destination(href)}{_title(node)})"
    if kind == "image":
        src = str(node.attrs.get("src", ""))
        alt = _render_inlines(node.children) if node.children else _escape(node.content, False)
        return f"![{alt}]({_destination(src)}{_title(node)})"
    return node.content


def _title(node: SyntaxTreeNode) -> str:
    title = node.attrs.get("title")
    if not title:
        return ""
    escaped = str(title).replace("\\", "\\\\").replace('"', '\\"')
    return f' "{escaped}"'


def _destination(url: str) -> str:
    if any(ch in url for ch in " ()<>"):
        return "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    return url


def _code_span(content: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
    ticks = "`" * (longest + 1)
    padded = content.startswith("`") or content.endswith("`") or (
        content.startswith(" ") and content.endswith(" ") and content.strip() != ""
    )
    if padded:
        content = f" {content} "
    return f"{ticks}{content}{ticks}"


def _escape(text: str, at_start: bool) -> str:
    out = []
    for index, ch in enumerate(text):
        following = text[index + 1] if index + 1 < len(text) else ""
        if (
            ch in _ALWAYS_ESCAPED
            or (ch == "&" and following.isascii() and following.isalpha())
            or (ch == "!" and following == "[")
        ):
            out.append("\\")
        out.append(ch)
    result = "".join(out)
    if at_start:
        if result[:1] in ("-", "+", "="):
            result = "\\" + result
        elif (match := _ORDERED_START.match(result)) is not None:
            cut = match.end(1)
            result = result[:cut] + "\\" + result[cut:]
    return result