"""
Tests for merging OCR-wrapped step lines.
"""

from recipe_capture.recipe_import.steps import merge_step_lines, parse_step_line, starts_with_number


class TestMergeStepLines:
    """Tests for merge_step_lines."""

    def test_wrapped_numbered_steps(self):
        lines = [
            "1. Den Ofen vorheizen und",
            "das Backblech vorbereiten",
            "2. Mehl in eine Schüssel geben",
        ]
        assert merge_step_lines(lines) == [
            "Den Ofen vorheizen und das Backblech vorbereiten",
            "Mehl in eine Schüssel geben",
        ]

    def test_sentences_inside_numbered_step_stay_together(self):
        lines = [
            "1. Den Backofen auf 180°C",
            "Ober-/Unterhitze vorheizen.",
            "Ein Backblech mit",
            "Backpapier auslegen.",
            "2. In einer Schüssel Mehl",
            "und Zucker vermischen",
        ]
        assert merge_step_lines(lines) == [
            "Den Backofen auf 180°C Ober-/Unterhitze vorheizen. Ein Backblech mit Backpapier auslegen.",
            "In einer Schüssel Mehl und Zucker vermischen",
        ]

    def test_unnumbered_sentences_split(self):
        assert merge_step_lines(["Nudeln kochen.", "Sauce zubereiten.", "Servieren"]) == [
            "Nudeln kochen.",
            "Sauce zubereiten.",
            "Servieren",
        ]

    def test_unnumbered_continuation(self):
        assert merge_step_lines(["Die Nudeln in", "Salzwasser kochen."]) == ["Die Nudeln in Salzwasser kochen."]

    def test_marker_only_lines_are_skipped(self):
        assert merge_step_lines(["-", "1. Kochen"]) == ["Kochen"]

    def test_empty(self):
        assert merge_step_lines([]) == []


class TestStepLineHelpers:
    """Tests for parse_step_line / starts_with_number."""

    def test_parse_step_line(self):
        assert parse_step_line("2) Sauce rühren") == "Sauce rühren"
        assert parse_step_line("- ") is None

    def test_starts_with_number(self):
        assert starts_with_number("1. Kochen")
        assert starts_with_number("10) Servieren")
        assert not starts_with_number("1.5 l Wasser")
        assert not starts_with_number("Kochen")
