"""Marker vocabulary and lexer for generated lesson documents.

The generative source writes lessons in Spanish with a fixed set of markers:
section headings, dividers, "Pregunta N:" question openers, "Kanji N:" entries,
answer option glyphs and a checkmark for the correct answer. All of them live in
one table here; extractors ask the lexer for the kinds they care about instead
of re-scanning the text with their own literals.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Iterable, List, NamedTuple, Optional

# Section headings as authored by the generative source
QUIZ_HEADING = "### Mini Quiz Interactivo"
KANJI_HEADING = "### Desglose de Kanjis"

PROMPT_SEPARATOR = "--- PROMPTS ---"
PROMPT_PREFIX = "PROMPT:"

CHECKMARK = "✅"
OPTION_GLYPHS = ("🅰", "🅱", "🅲", "🅳")
OPTION_DIAMOND = "◆"
OPTION_LETTERS = ("A", "B", "C", "D")

# CJK Unified Ideographs (BMP only)
CJK_RANGE = r"\u4e00-\u9fff"


class MarkerKind(str, Enum):
    """Kinds of markers recognised in a lesson document."""

    PROMPT_SEPARATOR = "prompt_separator"
    HEADING = "heading"
    DIVIDER = "divider"
    QUESTION = "question"
    KANJI_ENTRY = "kanji_entry"
    CHECKMARK = "checkmark"
    OPTION_GLYPH = "option_glyph"
    OPTION_DIAMOND = "option_diamond"
    OPTION_LETTER = "option_letter"


# Order matters: earlier entries win when two kinds could start at the same
# position (the prompt separator contains a divider).
MARKER_PATTERNS: Dict[MarkerKind, str] = {
    MarkerKind.PROMPT_SEPARATOR: re.escape(PROMPT_SEPARATOR),
    MarkerKind.HEADING: r"^[ \t]*###[^\n]*",
    MarkerKind.DIVIDER: r"-{3,}",
    MarkerKind.QUESTION: r"Pregunta\s+(?P<question_number>\d+)\s*:",
    MarkerKind.KANJI_ENTRY: (
        r"Kanji\s+(?P<kanji_number>\d+)\s*:\s*"
        rf"(?P<kanji_char>[{CJK_RANGE}])?"
    ),
    MarkerKind.CHECKMARK: CHECKMARK,
    MarkerKind.OPTION_GLYPH: r"(?P<glyph>[\U0001F170-\U0001F173])\ufe0f?",
    MarkerKind.OPTION_DIAMOND: OPTION_DIAMOND,
    MarkerKind.OPTION_LETTER: rf"(?<![^\s{CHECKMARK}*{OPTION_DIAMOND}])(?P<letter>[A-D])\)",
}

OPTION_KINDS = frozenset(
    {MarkerKind.OPTION_GLYPH, MarkerKind.OPTION_DIAMOND, MarkerKind.OPTION_LETTER}
)


class Token(NamedTuple):
    """A recognised marker and its span in the scanned text."""

    kind: MarkerKind
    start: int
    end: int
    text: str
    value: Any = None


@lru_cache(maxsize=32)
def _compile(kinds: FrozenSet[MarkerKind]) -> "re.Pattern[str]":
    alternatives = [
        f"(?P<{kind.value}>{pattern})"
        for kind, pattern in MARKER_PATTERNS.items()
        if kind in kinds
    ]
    return re.compile("|".join(alternatives), re.MULTILINE)


def _token_value(kind: MarkerKind, match: "re.Match[str]") -> Any:
    if kind is MarkerKind.QUESTION:
        return int(match.group("question_number"))
    if kind is MarkerKind.KANJI_ENTRY:
        # None when the character after the marker is outside the CJK block
        return match.group("kanji_char")
    if kind is MarkerKind.OPTION_GLYPH:
        return ord(match.group("glyph")) - ord(OPTION_GLYPHS[0])
    if kind is MarkerKind.OPTION_LETTER:
        return OPTION_LETTERS.index(match.group("letter"))
    return None


def tokenize(text: str, kinds: Optional[Iterable[MarkerKind]] = None) -> List[Token]:
    """Scan text once and return the markers of the requested kinds.

    Tokens are non-overlapping and in document order. When two kinds could
    match at the same position, the one listed first in MARKER_PATTERNS wins.

    Args:
        text: Text to scan
        kinds: Marker kinds to recognise (default: all)

    Returns:
        List of tokens

    Example:
        >>> [t.value for t in tokenize("Kanji 1: 猫\\nKanji 2: 犬", [MarkerKind.KANJI_ENTRY])]
        ['猫', '犬']
    """
    wanted = frozenset(kinds) if kinds is not None else frozenset(MARKER_PATTERNS)
    if not wanted or not text:
        return []

    tokens = []
    for match in _compile(wanted).finditer(text):
        kind = MarkerKind(match.lastgroup)
        tokens.append(
            Token(
                kind=kind,
                start=match.start(),
                end=match.end(),
                text=match.group(0),
                value=_token_value(kind, match),
            )
        )
    return tokens
