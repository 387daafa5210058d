"""Unit tests for the Telegram formatter."""

from sensei.renderers.telegram_formatter import DIVIDER_LINE, REWRITE_STEPS, format_for_telegram


class TestFormatForTelegram:
    """Tests for format_for_telegram()."""

    def test_empty_document(self):
        """Test empty input is just the closing divider."""
        assert format_for_telegram("") == DIVIDER_LINE

    def test_always_ends_with_divider(self, lesson):
        """Test the output ends with the divider line."""
        assert format_for_telegram(lesson).endswith(f"\n{DIVIDER_LINE}")
        assert format_for_telegram("texto").endswith(f"\n{DIVIDER_LINE}")

    def test_quiz_removed(self, lesson):
        """Test the quiz section never reaches Telegram."""
        text = format_for_telegram(lesson)
        assert "Mini Quiz Interactivo" not in text
        assert "Pregunta" not in text

    def test_no_markdown_headings_or_rules(self, lesson):
        """Test heading hashes and --- rules are gone."""
        text = format_for_telegram(lesson)
        assert "###" not in text
        assert "\n---\n" not in text

    def test_first_heading_has_no_divider(self, lesson):
        """Test the first section title starts the message."""
        assert format_for_telegram(lesson).startswith("📕 **Palabra a estudiar:**\n")

    def test_title_keeps_lesson_casing(self):
        """Test a known title is decorated with the label as written."""
        text = format_for_telegram("### Palabra a Estudiar:\n猫")
        assert text.startswith("📕 **Palabra a Estudiar:**\n")

    def test_section_titles_decorated(self, lesson):
        """Test known titles get their emoji and a leading divider."""
        text = format_for_telegram(lesson)

        assert f"\n{DIVIDER_LINE}\n📖 **Significado y Contextos de Uso:**" in text
        assert f"\n{DIVIDER_LINE}\n✍️ **Ejemplos Simples para Practicar:**" in text
        assert f"\n{DIVIDER_LINE}\n🈶 **Desglose de Kanjis:**" in text

    def test_bullets_normalized(self, lesson):
        """Test list markers become bullets."""
        text = format_for_telegram(lesson)

        assert "• 子猫が好きです。" in text
        assert "• **Kanji 1: 子** (ko)" in text
        assert "• **Significado:** niño" in text
        assert "*   " not in text

    def test_plain_sub_bullets(self):
        """Test unformatted kanji breakdown labels are bolded."""
        text = format_for_telegram(
            "Significado y Contextos de Uso:\ngato\n\n"
            "Desglose de Kanjis:\nKanji 1: 猫\nSignificado: gato\nOtras palabras con 猫: 子猫"
        )
        assert "• **Kanji 1:** 猫" in text
        assert "• **Significado:** gato" in text
        assert "• **Otras palabras con 猫:** 子猫" in text

    def test_short_meaning_title(self):
        """Test the short "Significado:" title is decorated once."""
        text = format_for_telegram("### Palabra a estudiar:\n猫\n\n### Significado:\ngato")
        assert f"\n{DIVIDER_LINE}\n📖 **Significado:**\ngato" in text

    def test_generic_title_fallback(self):
        """Test unknown capitalised titles become bold headings."""
        text = format_for_telegram("### Palabra a estudiar:\n猫\n\n### Vocabulario Relacionado:\n犬")
        assert f"\n{DIVIDER_LINE}\n**Vocabulario Relacionado:**\n犬" in text

    def test_short_label_not_a_title(self):
        """Test labels shorter than six characters stay as they are."""
        text = format_for_telegram("Nota: hola")
        assert text == f"Nota: hola\n{DIVIDER_LINE}"

    def test_blank_runs_collapsed(self):
        """Test runs of blank lines collapse to one."""
        text = format_for_telegram("uno\n\n\n\n\ndos")
        assert text == f"uno\n\ndos\n{DIVIDER_LINE}"

    def test_dividers_removed(self):
        """Test divider lines are dropped without leaving extra gaps."""
        text = format_for_telegram("uno\n\n---\n\ndos")
        assert text == f"uno\n\ndos\n{DIVIDER_LINE}"


class TestRewriteSteps:
    """Tests for the rewrite pipeline table."""

    def test_quiz_stripped_first(self):
        """Test the quiz is removed before any other rewrite."""
        assert REWRITE_STEPS[0][0] == "strip_quiz"

    def test_closing_divider_last(self):
        """Test the closing divider is appended last."""
        assert REWRITE_STEPS[-1][0] == "append_closing_divider"
