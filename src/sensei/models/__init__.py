"""Data models shared by parsers, renderers and the delivery client."""

from sensei.models.lesson import (
    CorrectMarkerStrategy,
    DeliveryPayload,
    DeliveryReceipt,
    LessonResponse,
    LessonViews,
    QuizQuestion,
)

__all__ = [
    "CorrectMarkerStrategy",
    "DeliveryPayload",
    "DeliveryReceipt",
    "LessonResponse",
    "LessonViews",
    "QuizQuestion",
]
