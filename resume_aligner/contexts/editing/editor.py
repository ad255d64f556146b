"""
Edit operations on a parsed resume.

In-place mutations behind the structured editor: add, update and delete
sections, entries, content items, sub-bullets and skills. New items are
created with placeholder text so they show up (and can be typed over) in the
editor immediately.

Every operation that creates an item takes the IdGenerator used for the
document; lookups go by identifier, never by list position.
"""

from typing import Any, List, Optional, Tuple

from resume_aligner.contexts.editing.defaults import DEFAULT_SECTION_TITLES
from resume_aligner.contexts.editing.exceptions import ItemNotFoundError, SectionKindError
from resume_aligner.contexts.editing.logger import _log_debug
from resume_aligner.contexts.editing.resume_data_structure import (
    Bullet,
    BulletStyle,
    ContentItem,
    ContentType,
    IdGenerator,
    ParsedResume,
    ResumeEntry,
    ResumeSection,
    Skill,
    SkillsSection,
    StandardSection,
    Subheading,
    create_section,
)


class Placeholders:
    """Placeholder text for newly created items"""

    ENTRY_TITLE = "New Job Title"
    ENTRY_SUBTITLE = "Company Name"
    ENTRY_DATE = "Month Year - Present"
    ENTRY_BULLET = "Your key achievement..."
    BULLET = "New accomplishment..."
    SUBHEADING = "New Subheading"
    SUB_BULLET = "New detail..."
    SKILL_CATEGORY = "New Skill"
    SKILL_DETAILS = "Details about the skill..."


ENTRY_FIELDS = frozenset({"title", "subtitle", "date", "is_boxed"})
SKILL_FIELDS = frozenset({"category", "details"})
CONTENT_ITEM_FIELDS = {
    ContentType.BULLET: frozenset({"content", "style"}),
    ContentType.SUBHEADING: frozenset({"title"}),
    ContentType.FREESTANDING_SUBHEADING: frozenset({"content"}),
    ContentType.PLAINTEXT: frozenset({"content"}),
}


# =============================================================================
# HELPERS
# =============================================================================


def _index_of(items: List[Any], item_id: str, item_type: str) -> int:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    raise ItemNotFoundError(item_type, item_id)


def _apply_fields(target: Any, allowed: frozenset, fields: dict) -> None:
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(
            f"Cannot update {sorted(unknown)} on {type(target).__name__}; "
            f"allowed fields: {sorted(allowed)}"
        )
    for name, value in fields.items():
        setattr(target, name, value)


def _require_standard(section: ResumeSection) -> StandardSection:
    if not isinstance(section, StandardSection):
        raise SectionKindError("Skills sections do not hold entries", section_title=section.title)
    return section


def _require_skills(section: ResumeSection) -> SkillsSection:
    if not isinstance(section, SkillsSection):
        raise SectionKindError("Standard sections do not hold skills", section_title=section.title)
    return section


# =============================================================================
# SECTIONS
# =============================================================================


def add_section(document: ParsedResume, title: str, ids: IdGenerator) -> ResumeSection:
    """
    Append an empty section to the document.

    The section kind follows from the title (SKILLS, TOOLS, ... give a skills
    section). Empty sections are not written out by the reconstructor until
    they receive content.

    Args:
        document: Document to modify
        title: Section title
        ids: Identifier generator

    Returns:
        The new section

    Raises:
        ValueError: If the title is blank
    """
    if not title.strip():
        raise ValueError("Section title must not be blank")

    section = create_section(title.strip(), section_id=ids())
    document.sections.append(section)
    _log_debug(f"Added {section.kind} section '{section.title}'")
    return section


def get_section_by_id(document: ParsedResume, section_id: str) -> ResumeSection:
    return document.sections[_index_of(document.sections, section_id, "section")]


def delete_section(document: ParsedResume, section_id: str) -> ResumeSection:
    """Remove a section (and everything in it). Returns the removed section."""
    section = document.sections.pop(_index_of(document.sections, section_id, "section"))
    _log_debug(f"Deleted section '{section.title}'")
    return section


def rename_section(document: ParsedResume, section_id: str, title: str) -> ResumeSection:
    """
    Change a section's title.

    A rename never changes the section kind; renaming SKILLS to a standard
    title would otherwise strand its skill rows.
    """
    if not title.strip():
        raise ValueError("Section title must not be blank")
    section = get_section_by_id(document, section_id)
    section.title = title.strip()
    return section


def suggest_sections(document: ParsedResume) -> List[Tuple[str, str]]:
    """
    Menu of default sections the document does not have yet.

    Titles are compared case-insensitively, so a "Skills" section hides the
    SKILLS suggestion.

    Returns:
        (title, kind) pairs from DEFAULT_SECTION_TITLES, in menu order
    """
    present = {section.title.upper() for section in document.sections}
    return [(title, kind) for title, kind in DEFAULT_SECTION_TITLES if title not in present]


# =============================================================================
# ENTRIES
# =============================================================================


def add_entry(section: ResumeSection, ids: IdGenerator) -> ResumeEntry:
    """
    Append a placeholder entry with a single top-level bullet.

    The placeholder date ("Month Year - Present") names no real month, so an
    entry saved before its date is filled in re-parses as a freestanding
    subheading inside the previous entry (or a headingless entry).

    Raises:
        SectionKindError: If the section is a skills section
    """
    section = _require_standard(section)
    entry = ResumeEntry(
        title=Placeholders.ENTRY_TITLE,
        subtitle=Placeholders.ENTRY_SUBTITLE,
        date=Placeholders.ENTRY_DATE,
        content=[Bullet(content=Placeholders.ENTRY_BULLET, style=BulletStyle.TOP, id=ids())],
        id=ids(),
    )
    section.entries.append(entry)
    return entry


def get_entry(section: ResumeSection, entry_id: str) -> ResumeEntry:
    section = _require_standard(section)
    return section.entries[_index_of(section.entries, entry_id, "entry")]


def update_entry(section: ResumeSection, entry_id: str, **fields) -> ResumeEntry:
    """
    Update entry fields in place.

    Example:
        update_entry(section, entry.id, title="Analyst", is_boxed=True)

    Raises:
        ItemNotFoundError: If no entry has that id
        ValueError: If a field other than title/subtitle/date/is_boxed is given
    """
    entry = get_entry(section, entry_id)
    _apply_fields(entry, ENTRY_FIELDS, fields)
    return entry


def delete_entry(section: ResumeSection, entry_id: str) -> ResumeEntry:
    section = _require_standard(section)
    return section.entries.pop(_index_of(section.entries, entry_id, "entry"))


def move_entry(section: ResumeSection, entry_id: str, offset: int) -> int:
    """
    Move an entry up (negative offset) or down within its section.

    The position is clamped to the section bounds.

    Returns:
        The entry's new index
    """
    section = _require_standard(section)
    index = _index_of(section.entries, entry_id, "entry")
    new_index = max(0, min(len(section.entries) - 1, index + offset))
    section.entries.insert(new_index, section.entries.pop(index))
    return new_index


# =============================================================================
# CONTENT ITEMS
# =============================================================================


def add_content_item(entry: ResumeEntry, item_type: str, ids: IdGenerator) -> ContentItem:
    """
    Append a placeholder bullet or subheading to an entry.

    Args:
        entry: Entry to modify
        item_type: ContentType.BULLET or ContentType.SUBHEADING
        ids: Identifier generator

    Returns:
        The new content item

    Raises:
        ValueError: For any other item type
    """
    if item_type == ContentType.BULLET:
        item = Bullet(content=Placeholders.BULLET, style=BulletStyle.TOP, id=ids())
    elif item_type == ContentType.SUBHEADING:
        item = Subheading(title=Placeholders.SUBHEADING, id=ids())
    else:
        raise ValueError(
            f"Cannot add content item of type {item_type!r}; "
            f"expected '{ContentType.BULLET}' or '{ContentType.SUBHEADING}'"
        )
    entry.content.append(item)
    return item


def get_content_item(entry: ResumeEntry, item_id: str) -> ContentItem:
    return entry.content[_index_of(entry.content, item_id, "content item")]


def update_content_item(entry: ResumeEntry, item_id: str, **fields) -> ContentItem:
    """
    Update a content item in place.

    Allowed fields depend on the item type: bullets take content/style,
    subheadings take title, freestanding subheadings and plaintext take content.
    """
    item = get_content_item(entry, item_id)
    if "style" in fields and fields["style"] not in BulletStyle.all():
        raise ValueError(f"Unknown bullet style {fields['style']!r}; expected one of {BulletStyle.all()}")
    _apply_fields(item, CONTENT_ITEM_FIELDS[item.type], fields)
    return item


def delete_content_item(entry: ResumeEntry, item_id: str) -> ContentItem:
    return entry.content.pop(_index_of(entry.content, item_id, "content item"))


# =============================================================================
# SUB-BULLETS
# =============================================================================


def add_sub_bullet(subheading: Subheading, ids: IdGenerator) -> Bullet:
    bullet = Bullet(content=Placeholders.SUB_BULLET, style=BulletStyle.SUB, id=ids())
    subheading.bullets.append(bullet)
    return bullet


def update_sub_bullet(subheading: Subheading, bullet_id: str, content: str) -> Bullet:
    bullet = subheading.bullets[_index_of(subheading.bullets, bullet_id, "sub-bullet")]
    bullet.content = content
    return bullet


def delete_sub_bullet(subheading: Subheading, bullet_id: str) -> Bullet:
    return subheading.bullets.pop(_index_of(subheading.bullets, bullet_id, "sub-bullet"))


# =============================================================================
# SKILLS
# =============================================================================


def add_skill(section: ResumeSection, ids: IdGenerator) -> Skill:
    """
    Append a placeholder skill row.

    Raises:
        SectionKindError: If the section is a standard section
    """
    section = _require_skills(section)
    skill = Skill(category=Placeholders.SKILL_CATEGORY, details=Placeholders.SKILL_DETAILS, id=ids())
    section.skills.append(skill)
    return skill


def update_skill(
    section: ResumeSection,
    skill_id: str,
    category: Optional[str] = None,
    details: Optional[str] = None,
) -> Skill:
    section = _require_skills(section)
    skill = section.skills[_index_of(section.skills, skill_id, "skill")]
    fields = {name: value for name, value in (("category", category), ("details", details)) if value is not None}
    _apply_fields(skill, SKILL_FIELDS, fields)
    return skill


def delete_skill(section: ResumeSection, skill_id: str) -> Skill:
    section = _require_skills(section)
    return section.skills.pop(_index_of(section.skills, skill_id, "skill"))
