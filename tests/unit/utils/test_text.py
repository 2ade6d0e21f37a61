"""
test_text.py
------------
Tests for title derivation, previews and fallback snippets.
"""
from daybook.utils.text import (
    generate_snippet,
    generate_title_from_content,
    get_preview,
    truncate,
)


class TestGenerateTitle:
    """Tests for generate_title_from_content."""

    def test_short_first_line_kept(self):
        """A first line within 50 characters is the title."""
        assert generate_title_from_content("Had coffee with Sam") == "Had coffee with Sam"

    def test_only_first_line_used(self):
        """Later lines never reach the title."""
        assert generate_title_from_content("Rainy Sunday\nStayed in and read.") == "Rainy Sunday"

    def test_empty_content(self):
        """Empty or blank content gives 'Untitled'."""
        assert generate_title_from_content("") == "Untitled"
        assert generate_title_from_content("   \n  ") == "Untitled"
        assert generate_title_from_content(None) == "Untitled"

    def test_first_sentence_used(self):
        """A long line with an early sentence end yields that sentence."""
        content = "I woke up early. Then I walked along the river until the rain started."
        assert generate_title_from_content(content) == "I woke up early."

    def test_word_boundary_truncation(self):
        """Long lines without a sentence end are cut at a word boundary."""
        content = "The quick brown fox jumps over the lazy dog and keeps running far away"
        title = generate_title_from_content(content)
        assert title == "The quick brown fox jumps over the lazy dog and..."


class TestPreviewAndTruncate:
    """Tests for truncate and get_preview."""

    def test_truncate_short_text_unchanged(self):
        """Text within the limit is returned as-is."""
        assert truncate("short", 10) == "short"

    def test_truncate_adds_ellipsis(self):
        """Cut text ends with an ellipsis."""
        assert truncate("abcdefghij", 4) == "abcd..."

    def test_preview_collapses_whitespace(self):
        """Newlines and runs of spaces become single spaces."""
        assert get_preview("line one\n\n   line two") == "line one line two"


class TestGenerateSnippet:
    """Tests for the fallback snippet rule."""

    def test_context_around_match(self):
        """30 characters on each side with ellipses on cut edges."""
        content = "x" * 50 + "Sunrise" + "y" * 50
        snippet = generate_snippet(content, "sunrise")
        assert snippet == "..." + "x" * 30 + "Sunrise" + "y" * 30 + "..."

    def test_match_near_start(self):
        """No leading ellipsis when the match is near the start."""
        snippet = generate_snippet("Sunrise over the bay", "sunrise")
        assert snippet == "Sunrise over the bay"

    def test_no_match_uses_opening(self):
        """Without a match the first 100 characters are used."""
        content = "z" * 120
        assert generate_snippet(content, "missing") == "z" * 100 + "..."

    def test_no_match_short_content(self):
        """Short content without a match is returned whole."""
        assert generate_snippet("tiny", "missing") == "tiny"
