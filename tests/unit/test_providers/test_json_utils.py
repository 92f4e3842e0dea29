"""Unit tests for batch response parsing."""

from locale_translate.providers.json_utils import (
    extract_first_json_array,
    fix_escape_sequences,
    parse_string_array,
    strip_markdown_fences,
)


class TestParseStringArray:
    """Tests for parse_string_array."""

    def test_plain_array(self) -> None:
        """A bare JSON array parses directly."""
        assert parse_string_array('["Ciao", "Mondo"]') == ["Ciao", "Mondo"]

    def test_fenced_array(self) -> None:
        """Markdown fences are stripped first."""
        raw = '```json\n["Ciao", "Mondo"]\n```'
        assert parse_string_array(raw) == ["Ciao", "Mondo"]

    def test_array_followed_by_commentary(self) -> None:
        """Trailing prose after the array is ignored."""
        raw = 'Here you go: ["Uno", "Due"] Hope this helps!'
        assert parse_string_array(raw) == ["Uno", "Due"]

    def test_brackets_inside_strings(self) -> None:
        """Brackets inside translations do not end the array."""
        raw = 'Result: ["[Bozza] Nota", "Fine]"] done'
        assert parse_string_array(raw) == ["[Bozza] Nota", "Fine]"]

    def test_non_string_items_rejected(self) -> None:
        """Arrays with non-string items are not translations."""
        assert parse_string_array("[1, 2]") is None

    def test_no_array(self) -> None:
        """Text without an array yields None."""
        assert parse_string_array("I cannot translate that") is None


class TestHelpers:
    """Tests for lower-level helpers."""

    def test_fix_escape_sequences(self) -> None:
        """Lone backslashes are doubled."""
        assert fix_escape_sequences(r"a\_b") == r"a\\_b"
        assert fix_escape_sequences(r"a\nb") == r"a\nb"

    def test_extract_first_json_array_unbalanced(self) -> None:
        """An unterminated array yields None."""
        assert extract_first_json_array('["a", "b"') is None

    def test_strip_markdown_fences_plain_text(self) -> None:
        """Unfenced text is only trimmed."""
        assert strip_markdown_fences("  Ciao  ") == "Ciao"
