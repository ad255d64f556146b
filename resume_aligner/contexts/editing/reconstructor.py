"""
Resume text reconstruction.

Renders a ParsedResume back into the canonical line-oriented text form that
the parser reads, the analysis prompt embeds, and save/export operations
persist. Re-parsing the output yields the same structure as the input
document (minus empty sections, which are dropped on purpose).

Canonical form:

    Name<TAB>contact

    SECTION TITLE
    Title | Subtitle<TAB>Date
    • bullet
      o sub-bullet
    • Subheading:
      o owned bullet
    Plain or freestanding text

    SKILLS
    Category: details
    bare details (category "General")
"""

from typing import List, Optional

from resume_aligner.contexts.editing.resume_data_structure import (
    Bullet,
    BulletStyle,
    ContentItem,
    FreestandingSubheading,
    ParsedResume,
    Plaintext,
    ResumeEntry,
    ResumeHeader,
    ResumeSection,
    Skill,
    SkillsSection,
    Subheading,
)
from resume_aligner.contexts.editing.section_patterns import DEFAULT_SKILL_CATEGORY, Glyphs


def format_header_line(header: ResumeHeader) -> str:
    return f"{header.name}{Glyphs.FIELD_SEPARATOR}{header.contact}"


def format_entry_line(entry: ResumeEntry) -> Optional[str]:
    """
    Format the "Title | Subtitle<TAB>Date" line of an entry.

    Returns:
        The entry line, or None for entries without a heading
    """
    if not entry.has_heading:
        return None

    main = entry.title
    if entry.subtitle:
        main = f"{main} {Glyphs.TITLE_SEPARATOR} {entry.subtitle}"

    if entry.date:
        return f"{main}{Glyphs.FIELD_SEPARATOR}{entry.date}"
    return main


def format_bullet_line(bullet: Bullet) -> str:
    if bullet.style == BulletStyle.SUB:
        return f"{Glyphs.SUB_BULLET_INDENT}{Glyphs.SUB_BULLET} {bullet.content}"
    return f"{Glyphs.BULLET} {bullet.content}"


def format_content_item(item: ContentItem) -> List[str]:
    """Format one content item as one or more lines."""
    if isinstance(item, Bullet):
        return [format_bullet_line(item)]

    if isinstance(item, Subheading):
        lines = [f"{Glyphs.BULLET} {item.title}:"]
        # Owned bullets are always written as sub-bullets
        lines.extend(
            f"{Glyphs.SUB_BULLET_INDENT}{Glyphs.SUB_BULLET} {bullet.content}" for bullet in item.bullets
        )
        return lines

    if isinstance(item, (FreestandingSubheading, Plaintext)):
        return [item.content]

    raise TypeError(f"Unknown content item: {type(item).__name__}")


def format_skill_line(skill: Skill) -> str:
    # A bare line re-parses as General only when it is non-empty and colon-free
    if skill.category == DEFAULT_SKILL_CATEGORY and skill.details and ":" not in skill.details:
        return skill.details
    return f"{skill.category}: {skill.details}".rstrip()


def format_section(section: ResumeSection) -> List[str]:
    """Format a section as its title line followed by its content lines."""
    lines = [section.title.upper()]

    if isinstance(section, SkillsSection):
        lines.extend(format_skill_line(skill) for skill in section.skills)
        return lines

    for entry in section.entries:
        entry_line = format_entry_line(entry)
        if entry_line is not None:
            lines.append(entry_line)
        for item in entry.content:
            lines.extend(format_content_item(item))
    return lines


def reconstruct_resume(document: ParsedResume) -> str:
    """
    Render a document to canonical resume text.

    Sections with no entries (or no skills) are left out entirely so that
    placeholder headers do not pile up across editing sessions.

    Args:
        document: Parsed (and possibly edited) resume

    Returns:
        Trimmed text with a single trailing newline
    """
    blocks = []

    if document.header is not None:
        blocks.append(format_header_line(document.header))

    for section in document.sections:
        if section.is_empty:
            continue
        blocks.append("\n".join(format_section(section)))

    return "\n\n".join(blocks).strip() + "\n"
