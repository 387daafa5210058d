"""Pydantic models for lesson views and quiz delivery.

All views are derived from one immutable lesson string. Models are frozen so a
parsed quiz can be handed to the UI and to the delivery client without either
side mutating it.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# Enums
# ============================================================================


class CorrectMarkerStrategy(str, Enum):
    """How the correct quiz option is recognised inside a question block."""

    # A checkmark anywhere inside the option's own text (display quiz)
    ADJACENT = "adjacent"
    # A checkmark immediately followed by one of the option glyphs (bot quiz)
    PREFIXED = "prefixed"


# ============================================================================
# Quiz
# ============================================================================


class QuizQuestion(BaseModel):
    """Multiple-choice question parsed from the quiz section.

    Validation Rules:
    - 2 to 4 options
    - correct_index points at an existing option
    """

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., description="Question stem")
    options: List[str] = Field(
        ..., min_length=2, max_length=4, description="Answer options in A-D order"
    )
    correct_index: int = Field(..., ge=0, description="Index of the correct option")

    @model_validator(mode="after")
    def validate_correct_index(self) -> "QuizQuestion":
        """Ensure correct_index refers to a valid option."""
        if self.correct_index >= len(self.options):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for "
                f"{len(self.options)} options"
            )
        return self


class DeliveryPayload(BaseModel):
    """Quiz shape accepted by the Telegram quiz bot (POST /send-quiz)."""

    model_config = ConfigDict(frozen=True)

    question: str
    options: List[str] = Field(..., min_length=2, max_length=4)
    correct_option_id: int = Field(..., ge=0)
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def validate_correct_option(self) -> "DeliveryPayload":
        if self.correct_option_id >= len(self.options):
            raise ValueError(
                f"correct_option_id {self.correct_option_id} out of range for "
                f"{len(self.options)} options"
            )
        return self

    @classmethod
    def from_question(
        cls, question: QuizQuestion, explanation: Optional[str] = None
    ) -> "DeliveryPayload":
        return cls(
            question=question.question,
            options=list(question.options),
            correct_option_id=question.correct_index,
            explanation=explanation,
        )


class DeliveryReceipt(BaseModel):
    """Acknowledgment returned by the quiz bot."""

    status: str
    message: Optional[str] = None
    result: Optional[Any] = None


# ============================================================================
# Lesson
# ============================================================================


class LessonResponse(BaseModel):
    """Raw generative response split into lesson body and image prompts."""

    lesson: str
    prompts: List[str] = Field(default_factory=list)


class LessonViews(BaseModel):
    """Every view derived from one lesson document."""

    quizzes: List[QuizQuestion] = Field(default_factory=list)
    kanji: List[str] = Field(default_factory=list)
    html: str = ""
    telegram_text: str = ""
    speech_text: str = ""

    model_config = {
        "json_schema_extra": {
            "example": {
                "quizzes": [
                    {
                        "question": "¿Qué significa 猫?",
                        "options": ["Perro", "Gato", "Pájaro", "Pez"],
                        "correct_index": 1,
                    }
                ],
                "kanji": ["猫"],
                "html": "<h3>Palabra a estudiar:</h3><p><strong>猫</strong> (neko)</p>",
                "telegram_text": "📕 **Palabra a estudiar:**\n**猫** (neko)\n━━━━━━━━━━━━━━",
                "speech_text": "Palabra a estudiar:\n猫 (neko)",
            }
        }
    }
