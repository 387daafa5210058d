"""Quiz extraction from the "Mini Quiz Interactivo" section.

Expected format:
    ### Mini Quiz Interactivo:
    Pregunta 1: ¿Qué significa "**猫**"?
    🅰️ Perro
    🅱️ Gato ✅
    🅲️ Pájaro
    🅳️ Pez

Options may use the glyphs above, a diamond bullet (◆) or plain "A)" to "D)".
The correct answer is flagged with a checkmark. Two recognition strategies are
supported:

- ADJACENT: the checkmark appears inside the option's own text
  (used for the interactive quiz shown in the app)
- PREFIXED: the checkmark is immediately followed by an option glyph,
  e.g. "✅ 🅱️" (used for the quizzes sent to the Telegram bot)

When no checkmark is recognised the last option is taken as correct. The
generation prompt puts the answer in a varied position without flagging it, so
this is a known simplification kept on purpose.
"""

import logging
import re
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from sensei.constants import QUIZ_DELIVERY_MAX, QUIZ_PARSER_MODE
from sensei.models.lesson import CorrectMarkerStrategy, DeliveryPayload, QuizQuestion
from sensei.parsers.markers import (
    OPTION_KINDS,
    OPTION_LETTERS,
    MarkerKind,
    Token,
    tokenize,
)
from sensei.parsers.sections import find_quiz_section

logger = logging.getLogger(__name__)

# Option families in recognition priority order
FAMILY_PRIORITY = (
    MarkerKind.OPTION_GLYPH,
    MarkerKind.OPTION_DIAMOND,
    MarkerKind.OPTION_LETTER,
)
BLOCK_KINDS = OPTION_KINDS | {MarkerKind.CHECKMARK}

MIN_OPTIONS = 2
_DECORATION_RE = re.compile(r"^(?:◆|\*(?!\*))\s*")
# Whole-option bold wrapper; inner text may not hold another bold span
_BOLD_RE = re.compile(r"^\*\*((?:(?!\*\*).)+)\*\*$")
# Closing "**" of a "**Pregunta N:**" label left at the start of the stem
_LABEL_BOLD_RE = re.compile(r"^\*\*\s*")


# ============================================================================
# CONFIGURATION
# ============================================================================


class QuizParserConfig(BaseModel):
    """Extraction policy for the quiz parser."""

    model_config = ConfigDict(frozen=True)

    max_questions: Optional[int] = Field(
        default=None, ge=1, description="Stop after this many questions (None = all)"
    )
    correct_marker: CorrectMarkerStrategy = CorrectMarkerStrategy.ADJACENT


DISPLAY_CONFIG = QuizParserConfig()
DELIVERY_CONFIG = QuizParserConfig(
    max_questions=3, correct_marker=CorrectMarkerStrategy.PREFIXED
)

PARSER_MODES: Dict[str, QuizParserConfig] = {
    "display": DISPLAY_CONFIG,
    "delivery": DELIVERY_CONFIG,
}


class _Option(NamedTuple):
    letter: int
    start: int
    end: int
    text: str


# ============================================================================
# BLOCK HELPERS
# ============================================================================


def split_question_blocks(section_text: str) -> List[str]:
    """Split a quiz section on "Pregunta N:" markers.

    The text before the first marker (the section heading) is dropped. Question
    numbers are not validated; blocks come back in encountered order.
    """
    markers = tokenize(section_text, [MarkerKind.QUESTION])
    blocks = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].start if i + 1 < len(markers) else len(section_text)
        blocks.append(section_text[marker.end : end])
    return blocks


def _detect_family(tokens: List[Token]) -> Optional[MarkerKind]:
    present = {token.kind for token in tokens}
    for kind in FAMILY_PRIORITY:
        if kind in present:
            return kind
    return None


def _collect_options(block: str, markers: List[Token], family: MarkerKind) -> List[_Option]:
    """Read option texts for one family of markers, ordered A to D."""
    options: Dict[int, _Option] = {}

    for position, marker in enumerate(markers):
        letter = position if family is MarkerKind.OPTION_DIAMOND else marker.value
        if letter >= len(OPTION_LETTERS):
            break
        if letter in options:
            continue

        next_start = markers[position + 1].start if position + 1 < len(markers) else len(block)
        raw = block[marker.end : next_start]

        # An option is a single line; leading whitespace may span the break
        leading = len(raw) - len(raw.lstrip())
        line_break = raw.find("\n", leading)
        end = marker.end + line_break if line_break != -1 else next_start

        text = _clean_option(block[marker.end : end])
        if not text:
            continue

        options[letter] = _Option(letter=letter, start=marker.start, end=end, text=text)

    return [options[letter] for letter in sorted(options)]


def _clean_option(text: str) -> str:
    """Strip bullet/diamond decoration and a bold wrapper from an option."""
    text = _DECORATION_RE.sub("", text.strip()).strip()
    bold = _BOLD_RE.match(text)
    if bold:
        text = bold.group(1).strip()
    return text


def _clean_stem(text: str) -> str:
    text = text.strip()
    if text.count("**") % 2:
        text = _LABEL_BOLD_RE.sub("", text, count=1)
    return text.strip()


# ============================================================================
# PARSER
# ============================================================================


class QuizParser:
    """Quiz parser configured by a correct-marker strategy and a question cap."""

    def __init__(self, config: Optional[QuizParserConfig] = None):
        self.config = config or DISPLAY_CONFIG

    @classmethod
    def for_mode(cls, mode: str, max_questions: Optional[int] = None) -> "QuizParser":
        """Build a parser from a configured mode name ("display" or "delivery").

        Raises:
            ValueError: If the mode is unknown
        """
        try:
            config = PARSER_MODES[mode.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown quiz parser mode: {mode}. Expected one of {sorted(PARSER_MODES)}"
            )

        if max_questions is not None:
            config = QuizParserConfig(
                max_questions=max_questions, correct_marker=config.correct_marker
            )
        return cls(config)

    def parse(self, document: str) -> List[QuizQuestion]:
        """Extract quiz questions from a full lesson document.

        Returns an empty list when the lesson has no quiz section.
        """
        section = find_quiz_section(document)
        if section is None:
            logger.debug("No quiz section found")
            return []
        return self.parse_section(section.text)

    def parse_section(self, section_text: str) -> List[QuizQuestion]:
        blocks = split_question_blocks(section_text)
        questions = []

        for number, block in enumerate(blocks, start=1):
            if self.config.max_questions is not None and len(questions) >= self.config.max_questions:
                break

            question = self.parse_block(block)
            if question is None:
                logger.warning(
                    f"Question block {number} has fewer than {MIN_OPTIONS} options, skipping"
                )
                continue
            questions.append(question)

        logger.info(
            f"Extracted {len(questions)} quiz questions from {len(blocks)} blocks",
            extra={
                "question_count": len(questions),
                "block_count": len(blocks),
                "strategy": self.config.correct_marker.value,
            },
        )
        return questions

    def parse_block(self, block: str) -> Optional[QuizQuestion]:
        """Parse one question block; None if fewer than two options are recoverable."""
        tokens = tokenize(block, BLOCK_KINDS)
        family = _detect_family(tokens)
        if family is None:
            return None

        markers = [token for token in tokens if token.kind is family]
        options = _collect_options(block, markers, family)
        if len(options) < MIN_OPTIONS:
            return None

        return QuizQuestion(
            question=_clean_stem(block[: markers[0].start]),
            options=[option.text for option in options],
            correct_index=self._find_correct_index(block, tokens, options),
        )

    def _find_correct_index(
        self, block: str, tokens: List[Token], options: List[_Option]
    ) -> int:
        checkmarks = [token for token in tokens if token.kind is MarkerKind.CHECKMARK]

        if self.config.correct_marker is CorrectMarkerStrategy.ADJACENT:
            for index, option in enumerate(options):
                if any(option.start <= mark.start < option.end for mark in checkmarks):
                    return index

        elif self.config.correct_marker is CorrectMarkerStrategy.PREFIXED:
            letters = [option.letter for option in options]
            for current, following in zip(tokens, tokens[1:]):
                if current.kind is not MarkerKind.CHECKMARK:
                    continue
                if following.kind is not MarkerKind.OPTION_GLYPH:
                    continue
                if block[current.end : following.start].strip():
                    continue
                if following.value in letters:
                    return letters.index(following.value)

        return len(options) - 1


# ============================================================================
# ENTRY POINTS
# ============================================================================


def extract_quizzes(document: str, mode: Optional[str] = None) -> List[QuizQuestion]:
    """Extract quiz questions using a parser mode (default: QUIZ_PARSER_MODE)."""
    return QuizParser.for_mode(mode or QUIZ_PARSER_MODE).parse(document)


def build_delivery_payloads(
    document: str, max_questions: int = QUIZ_DELIVERY_MAX
) -> List[DeliveryPayload]:
    """Build the Telegram quiz payloads for a lesson.

    Args:
        document: Lesson document
        max_questions: Maximum number of quizzes in the batch (default: QUIZ_DELIVERY_MAX)

    Returns:
        Payloads in extraction order, each with a "Pregunta i de n" explanation
    """
    questions = QuizParser.for_mode("delivery", max_questions=max_questions).parse(document)
    total = len(questions)
    return [
        DeliveryPayload.from_question(
            question, explanation=f"✅ ¡Correcto! Pregunta {i} de {total}"
        )
        for i, question in enumerate(questions, start=1)
    ]
