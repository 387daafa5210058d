"""Parsers for generated lesson documents.

This module provides the marker lexer, the section locator and the extractors
that read quiz questions and kanji out of a lesson.
"""

from sensei.parsers.kanji_parser import extract_kanji
from sensei.parsers.quiz_parser import (
    DELIVERY_CONFIG,
    DISPLAY_CONFIG,
    QuizParser,
    QuizParserConfig,
    build_delivery_payloads,
    extract_quizzes,
)
from sensei.parsers.sections import (
    LessonFormatError,
    find_section,
    remove_section,
    split_lesson_response,
    strip_quiz_section,
)

__all__ = [
    "extract_kanji",
    "DELIVERY_CONFIG",
    "DISPLAY_CONFIG",
    "QuizParser",
    "QuizParserConfig",
    "build_delivery_payloads",
    "extract_quizzes",
    "LessonFormatError",
    "find_section",
    "remove_section",
    "split_lesson_response",
    "strip_quiz_section",
]
