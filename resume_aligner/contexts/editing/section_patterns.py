"""
Resume Text Pattern Constants

Centralized vocabularies and regex strings used for classifying resume lines.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass

from resume_aligner.utils.markup import MarkupPatterns

# Recognized section titles. A line is a section header only if it equals one
# of these exactly (after trimming and markup stripping).
SECTION_HEADERS = (
    "EDUCATION",
    "PROFESSIONAL EXPERIENCE",
    "EXPERIENCE",
    "SKILLS",
    "TECHNICAL SKILLS",
    "TOOLS",
    "FRAMEWORKS",
    "ANALYTICAL SKILLS",
    "PROJECTS",
    "EXTRACURRICULAR INVOLVEMENT",
    "LEADERSHIP",
    "SUMMARY",
    "OBJECTIVE",
    "PUBLICATIONS",
    "CERTIFICATIONS",
    "AWARDS",
)

# Sections whose lines are "Category: details" skill rows instead of entries
SKILLS_SECTION_HEADERS = frozenset(
    {
        "SKILLS",
        "TECHNICAL SKILLS",
        "TOOLS",
        "FRAMEWORKS",
        "ANALYTICAL SKILLS",
    }
)

DEFAULT_SKILL_CATEGORY = "General"


@dataclass(frozen=True)
class Glyphs:
    """
    Delimiters and list markers of the line-oriented resume format.
    """

    FIELD_SEPARATOR: str = "\t"
    TITLE_SEPARATOR: str = "|"
    BULLET: str = "•"
    ALT_BULLET: str = "*"
    SUB_BULLET: str = "o"
    SUB_BULLET_INDENT: str = "  "


@dataclass(frozen=True)
class LineRegex:
    """
    Compiled-on-use regex strings for line classification.

    All patterns are applied to trimmed lines.
    """

    # "• text" or "* text"; the marker may be glued to the text
    TOP_BULLET: str = r"^[•*]\s*(?P<rest>.*)$"

    # "o text" / "o<TAB>text"; a separator is required so words like
    # "organized" are not mistaken for sub-bullets
    SUB_BULLET: str = r"^o[ \t]+(?P<rest>.*)$"

    # "Label: rest", optionally wrapped in bold ("<b>Label:</b> rest")
    LABEL: str = (
        rf"^(?:{MarkupPatterns.BOLD_OPEN})?\s*(?P<label>[^:<>]+?)\s*(?:{MarkupPatterns.BOLD_CLOSE})?\s*:"
        rf"\s*(?:{MarkupPatterns.BOLD_CLOSE})?\s*(?P<rest>.*)$"
    )

    # Month name (or Present/Current) followed eventually by a 2-4 digit year
    DATE: str = (
        r"\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?"
        r"|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
        r"|Present|Current)\b.*?\b\d{2,4}\b"
    )

    NUMERIC: str = r"^\d+$"


def is_section_title(title: str) -> bool:
    """Check whether a title is one of the recognized section headers."""
    return title in SECTION_HEADERS


def is_skills_title(title: str) -> bool:
    """
    Check whether a section title denotes a skills-kind section.

    Matching is case-insensitive so titles typed in the editor ("Skills")
    get the same section kind as parsed ones.
    """
    return title.strip().upper() in SKILLS_SECTION_HEADERS
