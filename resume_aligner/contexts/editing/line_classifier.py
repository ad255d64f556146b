"""
Line classification for tab-delimited resume text.

Each function inspects a single source line and either returns a typed
classification or None. `classify_line` applies the rules in precedence order:

1. Section header   - exact match against the recognized titles
2. Header/contact   - first non-blank line only (see `match_header_line`)
3. Dated entry      - "Title | Subtitle<TAB>Sep 2018 – Jun 2022"
4. Top-level bullet - "• text" / "* text", or a "• Label: text" subheading
5. Sub-bullet       - "o text"
6. Fallback         - freestanding subheading if bullets follow, else plaintext
7. Skill row        - every other line inside a skills section

All functions are pure. Inline markup is stripped only for matching; stored
fields keep it.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from resume_aligner.contexts.editing.section_patterns import (
    DEFAULT_SKILL_CATEGORY,
    Glyphs,
    LineRegex,
    is_section_title,
)
from resume_aligner.utils.markup import strip_markup

_TOP_BULLET_RE = re.compile(LineRegex.TOP_BULLET)
_SUB_BULLET_RE = re.compile(LineRegex.SUB_BULLET)
_LABEL_RE = re.compile(LineRegex.LABEL)
_DATE_RE = re.compile(LineRegex.DATE, re.IGNORECASE)
_NUMERIC_RE = re.compile(LineRegex.NUMERIC)


# =============================================================================
# CLASSIFICATION RESULTS
# =============================================================================


@dataclass(frozen=True)
class BlankLine:
    pass


@dataclass(frozen=True)
class SectionHeaderLine:
    title: str


@dataclass(frozen=True)
class HeaderLine:
    name: str
    contact: str


@dataclass(frozen=True)
class DatedEntryLine:
    title: str
    subtitle: str
    date: str


@dataclass(frozen=True)
class BulletLine:
    content: str


@dataclass(frozen=True)
class SubheadingLine:
    """A "• Label: text" line; `seed` is the inline text after the colon."""

    title: str
    seed: str


@dataclass(frozen=True)
class SubBulletLine:
    content: str


@dataclass(frozen=True)
class FreestandingSubheadingLine:
    content: str


@dataclass(frozen=True)
class PlaintextLine:
    content: str


@dataclass(frozen=True)
class SkillLine:
    category: str
    details: str


ClassifiedLine = Union[
    BlankLine,
    SectionHeaderLine,
    HeaderLine,
    DatedEntryLine,
    BulletLine,
    SubheadingLine,
    SubBulletLine,
    FreestandingSubheadingLine,
    PlaintextLine,
    SkillLine,
]


# =============================================================================
# INDIVIDUAL RULES
# =============================================================================


def match_section_header(line: str) -> Optional[str]:
    """
    Return the section title if the whole line is a recognized header.

    The comparison is exact and case-sensitive after trimming and markup
    stripping, so loud all-caps bullet text is never mistaken for a header.

    Example:
        >>> match_section_header("  <b>EDUCATION</b> ")
        'EDUCATION'
        >>> match_section_header("Education") is None
        True
        >>> match_section_header("EDUCATION AND TRAINING") is None
        True
    """
    candidate = strip_markup(line.strip())
    return candidate if is_section_title(candidate) else None


def match_header_line(line: str) -> Optional[HeaderLine]:
    """
    Split a "Name<TAB>contact" line into its fields.

    Needs at least two tab-separated fields and a first field that is not
    purely numeric. Contact fields are re-joined with tabs and kept as opaque
    text (they usually carry <b>/<a> markup).

    Example:
        >>> match_header_line("John Smith\\tjohn@example.com | 555-1234")
        HeaderLine(name='John Smith', contact='john@example.com | 555-1234')
        >>> match_header_line("John Smith") is None
        True
    """
    fields = line.strip().split(Glyphs.FIELD_SEPARATOR)
    if len(fields) < 2:
        return None

    name = fields[0].strip()
    if not name or _NUMERIC_RE.match(strip_markup(name)):
        return None

    contact = Glyphs.FIELD_SEPARATOR.join(fields[1:]).strip()
    return HeaderLine(name=name, contact=contact)


def is_date_like(text: str) -> bool:
    """
    Check for a month name (or Present/Current) followed by a 2-4 digit year.

    Example:
        >>> is_date_like("<b>Sep 19 – Sep 20</b>")
        True
        >>> is_date_like("2018 – Present")
        False
    """
    return _DATE_RE.search(strip_markup(text)) is not None


def split_title(main: str) -> Tuple[str, str]:
    """
    Split "Title | Subtitle" on the first pipe.

    Example:
        >>> split_title("BSc Computer Science | MIT | GPA 3.9")
        ('BSc Computer Science', 'MIT | GPA 3.9')
        >>> split_title("Intern")
        ('Intern', '')
    """
    title, _, subtitle = main.partition(Glyphs.TITLE_SEPARATOR)
    return title.strip(), subtitle.strip()


def match_dated_entry(line: str) -> Optional[DatedEntryLine]:
    """
    Recognize an entry line whose last tab-separated field is a date.

    The part before the date must not itself be a section header.

    Example:
        >>> match_dated_entry("BSc Computer Science | MIT\\tSep 2018 – Jun 2022")
        DatedEntryLine(title='BSc Computer Science', subtitle='MIT', date='Sep 2018 – Jun 2022')
    """
    fields = line.strip().split(Glyphs.FIELD_SEPARATOR)
    if len(fields) < 2:
        return None

    date = fields[-1].strip()
    if not is_date_like(date):
        return None

    main = Glyphs.FIELD_SEPARATOR.join(fields[:-1]).strip()
    if is_section_title(strip_markup(main)):
        return None

    title, subtitle = split_title(main)
    return DatedEntryLine(title=title, subtitle=subtitle, date=date)


def split_label(text: str) -> Optional[Tuple[str, str]]:
    """
    Split "Label: rest" text, tolerating a bold wrapper around the label.

    Returns:
        (label, rest) or None when the text has no label prefix

    Example:
        >>> split_label("<b>FP&A:</b> Took P&L ownership")
        ('FP&A', 'Took P&L ownership')
        >>> split_label("Reduced stockouts by 30%") is None
        True
    """
    match = _LABEL_RE.match(text)
    if not match:
        return None
    return match.group("label").strip(), match.group("rest").strip()


def match_top_bullet(trimmed: str) -> Optional[Union[BulletLine, SubheadingLine]]:
    """
    Recognize "• text" / "* text" lines.

    A bullet whose text starts with "Label:" is a subheading; its inline text
    (if any) becomes the first sub-bullet.
    """
    match = _TOP_BULLET_RE.match(trimmed)
    if not match:
        return None

    rest = match.group("rest").strip()
    labelled = split_label(rest)
    if labelled:
        return SubheadingLine(title=labelled[0], seed=labelled[1])
    return BulletLine(content=rest)


def match_sub_bullet(trimmed: str) -> Optional[SubBulletLine]:
    """Recognize "o text" lines (a space or tab must follow the marker)."""
    match = _SUB_BULLET_RE.match(trimmed)
    if not match:
        return None
    return SubBulletLine(content=match.group("rest").strip())


def starts_with_list_marker(line: Optional[str]) -> bool:
    """Check whether a line opens with a bullet (•, *) or sub-bullet (o) marker."""
    if line is None:
        return False
    trimmed = line.strip()
    return bool(_TOP_BULLET_RE.match(trimmed) or _SUB_BULLET_RE.match(trimmed))


def classify_skill(line: str) -> SkillLine:
    """
    Split a skills-section line into category and details.

    Lines without a colon fall into the "General" category.

    Example:
        >>> classify_skill("Languages: English, Spanish")
        SkillLine(category='Languages', details='English, Spanish')
        >>> classify_skill("Fluent in Spanish")
        SkillLine(category='General', details='Fluent in Spanish')
    """
    trimmed = line.strip()

    labelled = split_label(trimmed)
    if labelled:
        return SkillLine(category=labelled[0], details=labelled[1])

    category, colon, details = trimmed.partition(":")
    if not colon:
        return SkillLine(category=DEFAULT_SKILL_CATEGORY, details=trimmed)
    return SkillLine(category=category.strip(), details=details.strip())


# =============================================================================
# COMBINED CLASSIFIER
# =============================================================================


def classify_line(
    line: str,
    lookahead: Callable[[], Optional[str]] = lambda: None,
    in_skills_section: bool = False,
) -> ClassifiedLine:
    """
    Classify one line of resume text.

    The header/contact rule is not applied here; it depends on document
    position and is driven by the parser.

    Args:
        line: Source line (untrimmed)
        lookahead: Callable returning the next non-blank line (or None).
            Only invoked for the freestanding-subheading decision.
        in_skills_section: Whether the line sits inside a skills-kind section

    Returns:
        One of the classification dataclasses
    """
    trimmed = line.strip()
    if not trimmed:
        return BlankLine()

    title = match_section_header(trimmed)
    if title:
        return SectionHeaderLine(title=title)

    if in_skills_section:
        return classify_skill(trimmed)

    entry = match_dated_entry(trimmed)
    if entry:
        return entry

    bullet = match_top_bullet(trimmed)
    if bullet:
        return bullet

    sub_bullet = match_sub_bullet(trimmed)
    if sub_bullet:
        return sub_bullet

    if starts_with_list_marker(lookahead()):
        return FreestandingSubheadingLine(content=trimmed)
    return PlaintextLine(content=trimmed)
