"""
Unit tests for resume line classification.

Tests the individual rules and the combined classifier in
resume_aligner.contexts.editing.line_classifier.
"""

import pytest

from resume_aligner.contexts.editing.line_classifier import (
    BlankLine,
    BulletLine,
    DatedEntryLine,
    FreestandingSubheadingLine,
    HeaderLine,
    PlaintextLine,
    SectionHeaderLine,
    SkillLine,
    SubBulletLine,
    SubheadingLine,
    classify_line,
    classify_skill,
    is_date_like,
    match_dated_entry,
    match_header_line,
    match_section_header,
    split_label,
    split_title,
    starts_with_list_marker,
)


class TestMatchSectionHeader:
    """Tests for match_section_header function."""

    def test_exact_title(self):
        """Test an exact recognized title."""
        assert match_section_header("EDUCATION") == "EDUCATION"

    def test_surrounding_whitespace_and_markup(self):
        """Markup and whitespace are ignored for matching."""
        assert match_section_header("  <b>PROFESSIONAL EXPERIENCE</b>  ") == "PROFESSIONAL EXPERIENCE"

    def test_case_sensitive(self):
        """Test that titles must be upper case."""
        assert match_section_header("Education") is None

    def test_partial_match_rejected(self):
        """Test that a title prefix is not a header."""
        assert match_section_header("EDUCATION AND TRAINING") is None

    def test_loud_uppercase_text_rejected(self):
        """All-caps text that is not a known title is never a header."""
        assert match_section_header("INCREASED REVENUE BY 40%") is None


class TestMatchHeaderLine:
    """Tests for match_header_line function."""

    def test_name_and_contact(self):
        """Test splitting name and contact on the first tab."""
        result = match_header_line("John Smith\tjohn@example.com | 555-1234")
        assert result == HeaderLine(name="John Smith", contact="john@example.com | 555-1234")

    def test_extra_fields_rejoined_with_tabs(self):
        """Test that later tab fields stay in the contact."""
        result = match_header_line("Jane Doe\tjane@example.com\tLondon")
        assert result.name == "Jane Doe"
        assert result.contact == "jane@example.com\tLondon"

    def test_contact_markup_kept(self):
        """Test that contact markup is preserved."""
        result = match_header_line('Jane Doe\t<b><a href="mailto:j@x.com">j@x.com</a></b>')
        assert result.contact == '<b><a href="mailto:j@x.com">j@x.com</a></b>'

    def test_no_tab(self):
        """Test that a line without a tab is not a header."""
        assert match_header_line("John Smith john@example.com") is None

    def test_numeric_first_field(self):
        """Test that a numeric first field is not a name."""
        assert match_header_line("2024\tUpdated resume") is None


class TestDateDetection:
    """Tests for is_date_like and match_dated_entry."""

    @pytest.mark.parametrize(
        "text",
        [
            "Sep 2018 – Jun 2022",
            "<b>Sep 19 – Sep 20</b>",
            "January 2020 - Present",
            "Present 2024",
            "Current, since 2021",
            "may 2019",
        ],
    )
    def test_date_like(self, text):
        """Test strings recognized as dates."""
        assert is_date_like(text)

    @pytest.mark.parametrize("text", ["2018 – Present", "Year", "Month Year – Present", "Remote"])
    def test_not_date_like(self, text):
        """Test strings rejected as dates."""
        assert not is_date_like(text)

    def test_dated_entry_with_subtitle(self):
        """Test title, subtitle and date fields."""
        result = match_dated_entry("BSc Computer Science | MIT\tSep 2018 – Jun 2022")
        assert result == DatedEntryLine(title="BSc Computer Science", subtitle="MIT", date="Sep 2018 – Jun 2022")

    def test_dated_entry_without_subtitle(self):
        """Test an entry line without a pipe."""
        result = match_dated_entry("Research Intern\tJun 2021 – Aug 2021")
        assert result == DatedEntryLine(title="Research Intern", subtitle="", date="Jun 2021 – Aug 2021")

    def test_dated_entry_keeps_markup(self):
        """Test that markup stays in entry fields."""
        result = match_dated_entry("<b>MSc | KCL</b>\t<b>Sep 19 – Sep 20</b>")
        assert result.title == "<b>MSc"
        assert result.subtitle == "KCL</b>"
        assert result.date == "<b>Sep 19 – Sep 20</b>"

    def test_section_header_with_date_is_not_entry(self):
        """Test that a section title is never an entry title."""
        assert match_dated_entry("EDUCATION\tSep 2018") is None

    def test_single_field(self):
        """Test that a dated line needs a tab-separated date."""
        assert match_dated_entry("Joined in Sep 2018") is None

    def test_split_title_only_first_pipe(self):
        """Test that only the first pipe splits title from subtitle."""
        assert split_title("Degree | School | GPA 3.9") == ("Degree", "School | GPA 3.9")


class TestLabels:
    """Tests for split_label and classify_skill."""

    def test_plain_label(self):
        """Test a plain "Label: rest" split."""
        assert split_label("Category: first item") == ("Category", "first item")

    def test_bold_label(self):
        """Test a label wrapped in bold with the colon inside."""
        assert split_label("<b>FP&A:</b> Took P&L ownership") == ("FP&A", "Took P&L ownership")

    def test_colon_inside_bold(self):
        """Test a bold label with the colon outside."""
        assert split_label("<b>Tools</b>: Excel") == ("Tools", "Excel")

    def test_strong_label(self):
        """Test that <strong> wrappers are accepted like <b>."""
        assert split_label("<strong>Methods:</strong> Lean, Six Sigma") == ("Methods", "Lean, Six Sigma")

    def test_no_label(self):
        """Test text without a label prefix."""
        assert split_label("Reduced costs by 10%") is None

    def test_skill_with_category(self):
        """Test a categorized skill row."""
        assert classify_skill("Languages: English, Spanish") == SkillLine(
            category="Languages", details="English, Spanish"
        )

    def test_skill_without_colon(self):
        """Test that colon-free rows fall into General."""
        assert classify_skill("Fluent in Spanish") == SkillLine(category="General", details="Fluent in Spanish")

    def test_skill_splits_on_first_colon(self):
        """Test that only the first colon separates category."""
        assert classify_skill("Time: 10:00 - 18:00") == SkillLine(category="Time", details="10:00 - 18:00")


class TestClassifyLine:
    """Tests for the combined classify_line function."""

    def test_blank(self):
        """Test whitespace-only lines."""
        assert classify_line("   \t ") == BlankLine()

    def test_section_header_first(self):
        """Test that section headers win even inside skills sections."""
        assert classify_line("SKILLS", in_skills_section=True) == SectionHeaderLine(title="SKILLS")

    def test_top_bullet(self):
        """Test a "•" bullet."""
        assert classify_line("• Led a team of 4") == BulletLine(content="Led a team of 4")

    def test_asterisk_bullet(self):
        """Test a "*" bullet with indentation."""
        assert classify_line("  * Built models") == BulletLine(content="Built models")

    def test_subheading_with_seed(self):
        """Test a labelled bullet carrying inline text."""
        assert classify_line("• Category: first item") == SubheadingLine(title="Category", seed="first item")

    def test_subheading_without_seed(self):
        """Test a labelled bullet with nothing after the colon."""
        assert classify_line("• Category:") == SubheadingLine(title="Category", seed="")

    def test_sub_bullet_space(self):
        """Test an indented "o" bullet."""
        assert classify_line("  o detail text") == SubBulletLine(content="detail text")

    def test_sub_bullet_tab(self):
        """Test an "o" bullet separated by a tab."""
        assert classify_line("o\tdetail text") == SubBulletLine(content="detail text")

    def test_word_starting_with_o_is_not_sub_bullet(self):
        """Test that words starting with "o" are not sub-bullets."""
        result = classify_line("organized the annual offsite")
        assert isinstance(result, PlaintextLine)

    def test_dated_entry_before_bullet(self):
        """Test that dated lines classify before bullets."""
        result = classify_line("Analyst | Acme\tMar 2020 – Present")
        assert result == DatedEntryLine(title="Analyst", subtitle="Acme", date="Mar 2020 – Present")

    def test_freestanding_subheading_when_bullet_follows(self):
        """Test a short line followed by a bullet."""
        result = classify_line("Key Projects", lookahead=lambda: "• Migrated data")
        assert result == FreestandingSubheadingLine(content="Key Projects")

    def test_freestanding_subheading_when_sub_bullet_follows(self):
        """Test a short line followed by a sub-bullet."""
        result = classify_line("Key Projects", lookahead=lambda: "   o detail")
        assert isinstance(result, FreestandingSubheadingLine)

    def test_plaintext_when_text_follows(self):
        """Test a line followed by ordinary text."""
        result = classify_line("  Some sentence.  ", lookahead=lambda: "Another sentence")
        assert result == PlaintextLine(content="Some sentence.")

    def test_plaintext_at_end_of_input(self):
        """Test the last line of input."""
        assert classify_line("Last line") == PlaintextLine(content="Last line")

    def test_lookahead_only_used_for_fallback(self):
        """Test that lookahead is not called for bullets."""
        def fail():
            raise AssertionError("lookahead should not be consulted")

        assert classify_line("• bullet", lookahead=fail) == BulletLine(content="bullet")

    def test_skills_section_lines_are_skills(self):
        """Inside a skills section, bullets and dates are still skill rows."""
        assert classify_line("• Python", in_skills_section=True) == SkillLine(category="General", details="• Python")


class TestStartsWithListMarker:
    """Tests for starts_with_list_marker function."""

    @pytest.mark.parametrize("line", ["• a", "* a", "o a", "  o\ta"])
    def test_markers(self, line):
        """Test lines that open with a list marker."""
        assert starts_with_list_marker(line)

    @pytest.mark.parametrize("line", [None, "", "other", "oversaw"])
    def test_non_markers(self, line):
        """Test lines without a list marker."""
        assert not starts_with_list_marker(line)
