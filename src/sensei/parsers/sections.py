"""Section locator for generated lesson documents.

A section starts at a literal heading and runs to the first end marker after it
(a divider, another heading) or to the end of the document. A missing section
is a normal outcome and is returned as None.
"""

import logging
from typing import Iterable, NamedTuple, Optional

from sensei.models.lesson import LessonResponse
from sensei.parsers.markers import (
    KANJI_HEADING,
    PROMPT_PREFIX,
    QUIZ_HEADING,
    MarkerKind,
    tokenize,
)

logger = logging.getLogger(__name__)

QUIZ_END_MARKERS = (MarkerKind.DIVIDER,)
KANJI_END_MARKERS = (MarkerKind.DIVIDER, MarkerKind.HEADING)


class LessonFormatError(ValueError):
    """Raised when the generative response breaks the lesson/prompts contract."""

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response


class Section(NamedTuple):
    """Contiguous span of a lesson document."""

    start: int
    end: int
    text: str


def find_section(
    document: str,
    start_marker: str,
    end_markers: Iterable[MarkerKind],
    offset: int = 0,
) -> Optional[Section]:
    """Locate a section by its heading.

    Args:
        document: Lesson document
        start_marker: Literal heading text (case-sensitive)
        end_markers: Marker kinds that close the section
        offset: Position to start searching from (default: 0)

    Returns:
        Section from the heading (inclusive) to the first end marker after it
        (exclusive) or to the end of the document; None if the heading is absent

    Example:
        >>> find_section("### A\\nx\\n---\\ny", "### A", [MarkerKind.DIVIDER]).text
        '### A\\nx\\n'
    """
    if not document or not start_marker:
        return None

    start = document.find(start_marker, offset)
    if start == -1:
        return None

    body_start = start + len(start_marker)
    tokens = tokenize(document[body_start:], end_markers)
    end = body_start + tokens[0].start if tokens else len(document)

    return Section(start=start, end=end, text=document[start:end])


def remove_section(
    document: str, start_marker: str, end_markers: Iterable[MarkerKind]
) -> str:
    """Remove every occurrence of a section from the document.

    Returns the document unchanged when the section is absent.
    """
    end_markers = tuple(end_markers)
    section = find_section(document, start_marker, end_markers)
    while section is not None:
        document = document[: section.start] + document[section.end :]
        section = find_section(document, start_marker, end_markers, section.start)
    return document


def find_quiz_section(document: str) -> Optional[Section]:
    return find_section(document, QUIZ_HEADING, QUIZ_END_MARKERS)


def find_kanji_section(document: str) -> Optional[Section]:
    return find_section(document, KANJI_HEADING, KANJI_END_MARKERS)


def strip_quiz_section(document: str) -> str:
    return remove_section(document, QUIZ_HEADING, QUIZ_END_MARKERS)


def split_lesson_response(raw_response: str) -> LessonResponse:
    """Split a raw generative response into the lesson and its image prompts.

    Expected format:
        ### Palabra a estudiar:
        ...
        --- PROMPTS ---
        PROMPT: A cat sleeping on a tatami ...
        PROMPT: ...

    Args:
        raw_response: Text returned by the generative service

    Returns:
        LessonResponse with the trimmed lesson body and the prompt list

    Raises:
        LessonFormatError: If the prompts separator is missing
    """
    separators = tokenize(raw_response or "", [MarkerKind.PROMPT_SEPARATOR])
    if not separators:
        raise LessonFormatError(
            "Prompt separator not found in generated response", raw_response or ""
        )

    separator = separators[0]
    lesson = raw_response[: separator.start].strip()
    prompts_text = raw_response[separator.end :]

    prompts = []
    for line in prompts_text.splitlines():
        line = line.strip()
        if line.startswith(PROMPT_PREFIX):
            line = line[len(PROMPT_PREFIX) :].strip()
        if line:
            prompts.append(line)

    logger.info(
        f"Split generated response: {len(lesson)} lesson chars, {len(prompts)} prompts",
        extra={"lesson_chars": len(lesson), "prompt_count": len(prompts)},
    )

    return LessonResponse(lesson=lesson, prompts=prompts)
