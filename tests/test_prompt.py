"""Tests for handwriting_ocr.prompt — the shared transcription prompt."""

from handwriting_ocr.prompt import HANDWRITTEN_TEXT_PROMPT, instruction, language_name


class TestPromptContent:
    def test_forbids_translation(self):
        assert "translate" in HANDWRITTEN_TEXT_PROMPT.lower()

    def test_explains_binarized_input(self):
        assert "binarized" in HANDWRITTEN_TEXT_PROMPT

    def test_asks_for_plain_text(self):
        assert "plain text" in HANDWRITTEN_TEXT_PROMPT.lower()

    def test_marks_unreadable_words(self):
        assert "[?]" in HANDWRITTEN_TEXT_PROMPT


class TestLanguageNames:
    def test_known_code(self):
        assert language_name("tam") == "Tamil"

    def test_unknown_code_passes_through(self):
        assert language_name("xyz") == "xyz"

    def test_instruction_names_the_language(self):
        assert "Tamil" in instruction("tam")
