"""Lesson facade: every view of one lesson from the same input.

The extractors and renderers are independent pure functions over the lesson
string, so they can run in any order, or concurrently on different lessons.
"""

import logging
from typing import Optional, Tuple

from sensei.constants import QUIZ_PARSER_MODE
from sensei.models.lesson import LessonResponse, LessonViews
from sensei.parsers.kanji_parser import extract_kanji
from sensei.parsers.quiz_parser import extract_quizzes
from sensei.parsers.sections import split_lesson_response
from sensei.renderers.html_renderer import render_html
from sensei.renderers.speech import clean_for_speech
from sensei.renderers.telegram_formatter import format_for_telegram

logger = logging.getLogger(__name__)


def process_lesson(document: str, quiz_mode: Optional[str] = None) -> LessonViews:
    """Build all views of a lesson document.

    Args:
        document: Lesson document (without the image prompts)
        quiz_mode: Quiz parser mode, "display" or "delivery"
            (default: QUIZ_PARSER_MODE)

    Returns:
        LessonViews with quizzes, kanji, HTML, Telegram text and speech text

    Raises:
        ValueError: If quiz_mode is not a known parser mode
    """
    quiz_mode = quiz_mode or QUIZ_PARSER_MODE
    views = LessonViews(
        quizzes=extract_quizzes(document, mode=quiz_mode),
        kanji=extract_kanji(document),
        html=render_html(document),
        telegram_text=format_for_telegram(document),
        speech_text=clean_for_speech(document),
    )
    logger.info(
        f"Processed lesson: {len(views.quizzes)} quizzes, {len(views.kanji)} kanji",
        extra={
            "quiz_count": len(views.quizzes),
            "kanji_count": len(views.kanji),
            "quiz_mode": quiz_mode,
        },
    )
    return views


def process_response(
    raw_response: str, quiz_mode: Optional[str] = None
) -> Tuple[LessonResponse, LessonViews]:
    """Split a raw generative response and build the views of its lesson.

    Raises:
        LessonFormatError: If the prompts separator is missing
    """
    response = split_lesson_response(raw_response)
    return response, process_lesson(response.lesson, quiz_mode=quiz_mode)
