"""
Unit tests for text and markup utilities.

Tests resume_aligner.utils.text_processing and resume_aligner.utils.markup.
"""

from resume_aligner.utils.markup import has_markup, strip_markup
from resume_aligner.utils.text_processing import (
    get_text_diff,
    normalize_newlines,
    set_max_consecutive_blank_lines,
    truncate_display,
)


class TestStripMarkup:
    """Tests for strip_markup function."""

    def test_bold(self):
        """Test removing bold tags."""
        assert strip_markup("<b>EDUCATION</b>") == "EDUCATION"

    def test_link_and_entities(self):
        """Test removing links and decoding entities."""
        assert strip_markup('<a href="mailto:x@y.com">x@y.com</a> &amp; more') == "x@y.com & more"

    def test_empty(self):
        """Test empty input."""
        assert strip_markup("") == ""

    def test_comparison_operators_untouched(self):
        """Test that bare angle brackets are kept."""
        assert strip_markup("latency < 5ms and > 1ms") == "latency < 5ms and > 1ms"

    def test_has_markup(self):
        """Test markup detection."""
        assert has_markup("Cut costs by <b>30%</b>")
        assert not has_markup("Cut costs by 30%")


class TestTextProcessing:
    """Tests for newline handling, truncation and blank line normalization."""

    def test_normalize_newlines(self):
        """Test CRLF and CR conversion."""
        assert normalize_newlines("a\r\nb\rc\n") == "a\nb\nc\n"

    def test_truncate_display(self):
        """Test truncation with an ellipsis."""
        assert truncate_display("short", 10) == "short"
        assert truncate_display("this is a very long string", 10) == "this is..."

    def test_blank_lines_collapsed(self):
        """Test collapsing runs of blank lines."""
        assert set_max_consecutive_blank_lines("a\n\n\n\nb") == "a\n\nb"

    def test_blank_lines_removed(self):
        """Test removing blank lines entirely."""
        assert set_max_consecutive_blank_lines("a\n\n \n\nb\n\nc", max_consecutive=0) == "a\nb\nc"


class TestGetTextDiff:
    """Tests for get_text_diff function."""

    def test_blank_lines_and_trailing_whitespace_ignored(self):
        """Test that formatting-only changes give no diff."""
        diff_lines, num_diffs = get_text_diff("a\n\n\nb  \n", "a\nb")
        assert diff_lines == []
        assert num_diffs == 0

    def test_changed_line(self):
        """Test diff labels and counts for a changed line."""
        diff_lines, num_diffs = get_text_diff("a\nb\nc", "a\nB\nc", label1="left", label2="right")
        assert num_diffs == 2
        assert diff_lines[0] == "--- left"
        assert diff_lines[1] == "+++ right"
        assert "-b" in diff_lines
        assert "+B" in diff_lines
