"""Telegram-ready rewrite of a lesson document.

Telegram messages only keep **bold** spans, so headings, dividers and lists are
flattened into decorated plain text:

    📕 **Palabra a estudiar:**
    **猫** (neko)

    ━━━━━━━━━━━━━━
    📖 **Significado y Contextos de Uso:**
    ...
    ━━━━━━━━━━━━━━

Known titles keep the label as the lesson wrote it ("Palabra a estudiar",
"Palabra a Estudiar"); only the emoji and the bold markers are added around
it, so the output never swaps in a canonical label.

The rewrites run in a fixed order; later steps rely on the shapes left behind by
earlier ones (headings lose their "###" before titles are recognised, titles are
bolded before the generic fallback skips bold lines).
"""

import logging
import re
from typing import Callable, List, NamedTuple, Optional, Set, Tuple

from sensei.parsers.sections import strip_quiz_section

logger = logging.getLogger(__name__)

DIVIDER_LINE = "━" * 14
BULLET = "• "


class SectionTitle(NamedTuple):
    """Known section title and the emoji used for its heading."""

    key: str
    pattern: str
    emoji: str


SECTION_TITLES = [
    SectionTitle("word", r"Palabra a estudiar", "📕"),
    SectionTitle("meaning", r"Significado(?: y Contextos de Uso)?", "📖"),
    SectionTitle("examples", r"Ejemplos[^:\n]*", "✍️"),
    SectionTitle("kanji", r"Desglose de Kanjis", "🈶"),
    SectionTitle("fun_fact", r"Dato Curioso", "💡"),
]

_TITLE_RES = [
    (title, re.compile(rf"^(?P<title>{title.pattern}):(?P<rest>.*)$", re.IGNORECASE))
    for title in SECTION_TITLES
]

# Capitalised phrase of 6-81 chars followed by a colon, not already bold
_GENERIC_TITLE_RE = re.compile(r"^(?P<title>[A-ZÁÉÍÓÚÑ][^:\n]{5,80}):(?!\*)(?P<rest>.*)$")

_SUB_BULLETS: List[Tuple["re.Pattern[str]", str]] = [
    (re.compile(r"^(?:• )?Kanji (\d+):", re.IGNORECASE | re.MULTILINE), r"• **Kanji \1:**"),
    (re.compile(r"^(?:• )?Significado:", re.IGNORECASE | re.MULTILINE), "• **Significado:**"),
    (
        re.compile(r"^(?:• )?Otras palabras con ([^:\n]+):", re.IGNORECASE | re.MULTILINE),
        r"• **Otras palabras con \1:**",
    ),
]

_BLANKISH_RUN_RE = re.compile(r"[\n\r]+\s+[\n\r]+")
_BLANK_RUN_RE = re.compile(r"\n\s+\n")
_HEADING_PREFIX_RE = re.compile(r"^[ \t]*#{1,6}[ \t]?", re.MULTILINE)
_DIVIDER_ONLY_RE = re.compile(r"^[ \t]*-{2,}[ \t]*$", re.MULTILINE)
_BULLET_RE = re.compile(r"^[ \t]*[*-][ \t]+(?=\S)", re.MULTILINE)


# ============================================================================
# REWRITE STEPS
# ============================================================================


def _collapse_blank_lines(text: str) -> str:
    return _BLANKISH_RUN_RE.sub("\n\n", text.replace("\r\n", "\n"))


def _strip_heading_markers(text: str) -> str:
    return _HEADING_PREFIX_RE.sub("", text)


def _remove_dividers(text: str) -> str:
    text = _DIVIDER_ONLY_RE.sub("", text)
    return _BLANK_RUN_RE.sub("\n\n", text).strip()


def _decorated_heading(title: str, rest: str, emoji: Optional[str], first: bool) -> str:
    label = f"{emoji} **{title}:**" if emoji else f"**{title}:**"
    if first:
        return f"{label}{rest}"
    return f"\n{DIVIDER_LINE}\n{label}{rest}"


def _is_sub_bullet(line: str) -> bool:
    return any(pattern.match(line) for pattern, _ in _SUB_BULLETS)


def _decorate_section_titles(text: str) -> str:
    """Turn section title lines into emoji headings.

    Known titles are matched first (each at most once); any other capitalised
    "Title:" line falls back to a bold heading without emoji. Every heading
    except the first one in the text is preceded by a divider line.
    """
    used: Set[str] = set()
    seen_heading = False
    lines = []

    for line in text.split("\n"):
        heading = None

        for title, pattern in _TITLE_RES:
            if title.key in used:
                continue
            match = pattern.match(line)
            if match:
                used.add(title.key)
                heading = _decorated_heading(
                    match.group("title"), match.group("rest"), title.emoji, not seen_heading
                )
                break

        if heading is None and not _is_sub_bullet(line):
            match = _GENERIC_TITLE_RE.match(line)
            if match:
                heading = _decorated_heading(
                    match.group("title"), match.group("rest"), None, not seen_heading
                )

        if heading is None:
            lines.append(line)
        else:
            seen_heading = True
            lines.append(heading)

    return "\n".join(lines)


def _normalize_sub_bullets(text: str) -> str:
    for pattern, replacement in _SUB_BULLETS:
        text = pattern.sub(replacement, text)
    return text


def _normalize_bullets(text: str) -> str:
    return _BULLET_RE.sub(BULLET, text)


def _append_closing_divider(text: str) -> str:
    text = text.strip()
    return f"{text}\n{DIVIDER_LINE}" if text else DIVIDER_LINE


REWRITE_STEPS: List[Tuple[str, Callable[[str], str]]] = [
    ("strip_quiz", strip_quiz_section),
    ("collapse_blank_lines", _collapse_blank_lines),
    ("strip_heading_markers", _strip_heading_markers),
    ("remove_dividers", _remove_dividers),
    ("decorate_section_titles", _decorate_section_titles),
    ("normalize_sub_bullets", _normalize_sub_bullets),
    ("normalize_bullets", _normalize_bullets),
    ("append_closing_divider", _append_closing_divider),
]


def format_for_telegram(document: str) -> str:
    """Rewrite a lesson as plain text for a Telegram message.

    Args:
        document: Lesson document

    Returns:
        Text with bold spans and divider lines, quiz section removed,
        always ending with the closing divider line
    """
    text = document or ""
    for name, step in REWRITE_STEPS:
        text = step(text)
        logger.debug(f"Telegram rewrite step {name}: {len(text)} chars")
    return text
