"""
Markdown Utilities

Helper functions for formatting a parsed resume as markdown, for previews in
the terminal or in notes. Inline markup is passed through untouched.
"""

from resume_aligner.contexts.editing.resume_data_structure import (
    Bullet,
    BulletStyle,
    FreestandingSubheading,
    ParsedResume,
    Plaintext,
    ResumeEntry,
    SkillsSection,
    Subheading,
)
from resume_aligner.contexts.editing.section_patterns import DEFAULT_SKILL_CATEGORY


def format_entry_markdown(entry: ResumeEntry) -> str:
    """
    Format a single entry as markdown.

    Title and subtitle become a ### header (section header added separately
    by caller), the date an italic line, and content items list items.
    Subheadings are bolded with their bullets nested beneath.

    Args:
        entry: Entry to format

    Returns:
        Markdown-formatted entry (without section header)
    """
    parts = []

    if entry.has_heading:
        heading = " | ".join(part for part in (entry.title, entry.subtitle) if part)
        if heading:
            parts.append(f"### {heading}\n")
        if entry.date:
            parts.append(f"*{entry.date}*\n")

    for item in entry.content:
        if isinstance(item, Bullet):
            indent = "  " if item.style == BulletStyle.SUB else ""
            parts.append(f"{indent}- {item.content}")
        elif isinstance(item, Subheading):
            parts.append(f"- **{item.title}**")
            for bullet in item.bullets:
                parts.append(f"  - {bullet.content}")
        elif isinstance(item, FreestandingSubheading):
            parts.append(f"\n**{item.content}**\n")
        elif isinstance(item, Plaintext):
            parts.append(f"{item.content}\n")

    return "\n".join(parts)


def format_skills_markdown(section: SkillsSection) -> str:
    """Format skill rows as a list of "**category:** details" items."""
    parts = []
    for skill in section.skills:
        if skill.category == DEFAULT_SKILL_CATEGORY:
            parts.append(f"- {skill.details}")
        else:
            parts.append(f"- **{skill.category}:** {skill.details}")
    return "\n".join(parts)


def format_resume_markdown(document: ParsedResume) -> str:
    """
    Format a complete document as markdown.

    Empty sections are skipped, matching the text reconstruction.

    Args:
        document: Parsed resume

    Returns:
        Markdown string
    """
    parts = []

    if document.header is not None:
        parts.append(f"# {document.header.name}\n")
        parts.append(f"{document.header.contact}\n")

    for section in document.sections:
        if section.is_empty:
            continue

        parts.append(f"## {section.title}\n")
        if isinstance(section, SkillsSection):
            parts.append(format_skills_markdown(section) + "\n")
        else:
            for entry in section.entries:
                parts.append(format_entry_markdown(entry) + "\n")

    return "\n".join(parts).strip() + "\n"
