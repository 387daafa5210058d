"""Unit tests for lesson models."""

import pytest
from pydantic import ValidationError

from sensei.models.lesson import DeliveryPayload, LessonViews, QuizQuestion


class TestQuizQuestion:
    """Tests for QuizQuestion validation."""

    def test_valid(self):
        """Test a well-formed question."""
        quiz = QuizQuestion(question="¿猫?", options=["Perro", "Gato"], correct_index=1)
        assert quiz.options[quiz.correct_index] == "Gato"

    def test_correct_index_out_of_range(self):
        """Test correct_index must point at an option."""
        with pytest.raises(ValidationError, match="out of range"):
            QuizQuestion(question="¿猫?", options=["Perro", "Gato"], correct_index=2)

    def test_negative_index(self):
        """Test negative indices are rejected."""
        with pytest.raises(ValidationError):
            QuizQuestion(question="¿猫?", options=["Perro", "Gato"], correct_index=-1)

    @pytest.mark.parametrize("options", [["solo"], ["a", "b", "c", "d", "e"]])
    def test_option_count(self, options):
        """Test questions need two to four options."""
        with pytest.raises(ValidationError):
            QuizQuestion(question="¿猫?", options=options, correct_index=0)

    def test_frozen(self):
        """Test questions cannot be mutated."""
        quiz = QuizQuestion(question="¿猫?", options=["Perro", "Gato"], correct_index=1)
        with pytest.raises(ValidationError):
            quiz.correct_index = 0


class TestDeliveryPayload:
    """Tests for DeliveryPayload."""

    def test_from_question(self):
        """Test conversion keeps order and answer."""
        quiz = QuizQuestion(question="¿猫?", options=["Perro", "Gato", "Pez"], correct_index=1)
        payload = DeliveryPayload.from_question(quiz, explanation="✅ ¡Correcto! Pregunta 1 de 1")

        assert payload.model_dump() == {
            "question": "¿猫?",
            "options": ["Perro", "Gato", "Pez"],
            "correct_option_id": 1,
            "explanation": "✅ ¡Correcto! Pregunta 1 de 1",
        }

    def test_correct_option_out_of_range(self):
        """Test correct_option_id must point at an option."""
        with pytest.raises(ValidationError):
            DeliveryPayload(question="q", options=["a", "b"], correct_option_id=5)


class TestLessonViews:
    """Tests for LessonViews."""

    def test_defaults(self):
        """Test an empty lesson has empty views."""
        views = LessonViews()
        assert views.quizzes == []
        assert views.kanji == []
        assert views.html == ""
