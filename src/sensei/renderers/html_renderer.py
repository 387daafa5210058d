"""Minimal Markdown-to-HTML rendering for the lesson display.

Only the block forms the generative source actually writes are recognised:
headings, blockquotes, dividers, bullet items, paragraphs and blank lines.
Anything else degrades to a paragraph. Inline markup is limited to **bold**.
The quiz section is removed first; the app renders it interactively.
"""

import html
import logging
import re
from enum import Enum
from typing import List, NamedTuple

from sensei.parsers.sections import strip_quiz_section

logger = logging.getLogger(__name__)

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_BLOCKQUOTE_RE = re.compile(r"^&gt;\s?(.*)$")
_DIVIDER_RE = re.compile(r"^-{3,}$")
_LIST_ITEM_RE = re.compile(r"^\s*[*-]\s+(.*)$")


class LineKind(str, Enum):
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    DIVIDER = "divider"
    LIST_ITEM = "list_item"
    PARAGRAPH = "paragraph"
    BLANK = "blank"


class ListState(str, Enum):
    NONE = "none"
    IN_LIST = "in_list"


def render_inline(line: str) -> str:
    """Escape a line for HTML and turn **bold** spans into <strong>."""
    return _BOLD_RE.sub(r"<strong>\1</strong>", html.escape(line, quote=False))


class Block(NamedTuple):
    kind: LineKind
    content: str = ""
    level: int = 0


def classify_line(line: str) -> Block:
    """Classify an inline-rendered line into a block.

    Rules are checked in priority order: heading, blockquote, divider,
    list item, then paragraph or blank.
    """
    heading = _HEADING_RE.match(line)
    if heading:
        return Block(LineKind.HEADING, heading.group(2), len(heading.group(1)))
    quote = _BLOCKQUOTE_RE.match(line)
    if quote:
        return Block(LineKind.BLOCKQUOTE, quote.group(1))
    if _DIVIDER_RE.match(line.strip()):
        return Block(LineKind.DIVIDER)
    item = _LIST_ITEM_RE.match(line)
    if item:
        return Block(LineKind.LIST_ITEM, item.group(1))
    if line.strip():
        return Block(LineKind.PARAGRAPH, line)
    return Block(LineKind.BLANK)


def _render_block(block: Block) -> str:
    if block.kind is LineKind.HEADING:
        return f"<h{block.level}>{block.content}</h{block.level}>"
    if block.kind is LineKind.BLOCKQUOTE:
        return f"<blockquote>{block.content}</blockquote>"
    if block.kind is LineKind.DIVIDER:
        return "<hr>"
    if block.kind is LineKind.LIST_ITEM:
        return f"<li>{block.content}</li>"
    if block.kind is LineKind.PARAGRAPH:
        return f"<p>{block.content}</p>"
    return "<br>"


def render_html(document: str) -> str:
    """Render a lesson document (quiz section excluded) as an HTML fragment.

    Single forward pass over the lines with a two-state list machine:
    entering a list item from NONE opens <ul>, any other line kind from
    IN_LIST closes it, and an open list is closed at the end of input.

    Args:
        document: Lesson document

    Returns:
        HTML fragment (source text escaped)
    """
    text = strip_quiz_section(document or "").strip()
    if not text:
        return ""

    state = ListState.NONE
    fragments: List[str] = []

    for raw_line in text.split("\n"):
        block = classify_line(render_inline(raw_line.rstrip("\r")))
        in_list = block.kind is LineKind.LIST_ITEM

        if in_list and state is ListState.NONE:
            fragments.append("<ul>")
            state = ListState.IN_LIST
        elif not in_list and state is ListState.IN_LIST:
            fragments.append("</ul>")
            state = ListState.NONE

        fragments.append(_render_block(block))

    if state is ListState.IN_LIST:
        fragments.append("</ul>")

    logger.debug(f"Rendered {len(fragments)} HTML fragments")
    return "".join(fragments)
