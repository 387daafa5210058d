"""
Nihongo Sensei lesson toolkit

This package turns one generated Japanese vocabulary lesson (written in Spanish)
into the views the study app needs: interactive quiz items, the kanji list,
an HTML fragment, a Telegram-ready text and a speech-ready text.

**Version**: 0.1.0
**Key Dependencies**: pydantic, requests, loguru, python-dotenv
"""

__version__ = "0.1.0"
__author__ = "Nihongo Sensei"

# Views produced for every lesson
LESSON_VIEWS = ["quizzes", "kanji", "html", "telegram_text", "speech_text"]

__all__ = [
    "__version__",
    "__author__",
    "LESSON_VIEWS",
]
