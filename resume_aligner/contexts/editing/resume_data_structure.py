"""
Resume Document Structure

Defines the structured data representation of a resume for the editor.
This structure is the interface between the parser, the editor operations,
the reconstructor, and downstream consumers (preview, analysis).

Identifiers exist for list-key stability in the editor only. They never take
part in equality, so two documents compare equal whenever they have the same
structure and text.
"""

import uuid
from dataclasses import dataclass, field
from itertools import count
from typing import Any, ClassVar, Dict, List, Optional, Union

from resume_aligner.contexts.editing.exceptions import InvalidDocumentStructureError
from resume_aligner.contexts.editing.section_patterns import Glyphs, is_skills_title


class IdGenerator:
    """Produces unique identifiers for document items (uuid4 based)."""

    def __call__(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator(IdGenerator):
    """
    Deterministic identifier generator.

    Example:
        >>> ids = SequentialIdGenerator("item")
        >>> ids(), ids()
        ('item-1', 'item-2')
    """

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self._counter = count(1)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


class SectionKind:
    """Enum-like class for section kinds"""

    STANDARD = "standard"
    SKILLS = "skills"


class ContentType:
    """Enum-like class for entry content item tags"""

    BULLET = "bullet"
    SUBHEADING = "subheading"
    FREESTANDING_SUBHEADING = "freestanding_subheading"
    PLAINTEXT = "plaintext"


class BulletStyle:
    """Enum-like class for bullet glyphs"""

    TOP = Glyphs.BULLET
    SUB = Glyphs.SUB_BULLET

    @classmethod
    def all(cls) -> List[str]:
        return [cls.TOP, cls.SUB]


# =============================================================================
# CONTENT ITEMS
# =============================================================================


@dataclass
class Bullet:
    """A single achievement/detail line, top-level (•) or indented (o)."""

    content: str
    style: str = BulletStyle.TOP
    id: str = field(default="", compare=False)

    type: ClassVar[str] = ContentType.BULLET

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "style": self.style, "content": self.content}


@dataclass
class Subheading:
    """
    A bulleted "Label:" line that owns the `o` bullets following it.

    Attributes:
        title: Label text without the trailing colon
        bullets: Sub-bullets in source order
    """

    title: str
    bullets: List[Bullet] = field(default_factory=list)
    id: str = field(default="", compare=False)

    type: ClassVar[str] = ContentType.SUBHEADING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "bullets": [bullet.to_dict() for bullet in self.bullets],
        }


@dataclass
class FreestandingSubheading:
    """A standalone label line (not itself bulleted) that precedes bullets."""

    content: str
    id: str = field(default="", compare=False)

    type: ClassVar[str] = ContentType.FREESTANDING_SUBHEADING

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "content": self.content}


@dataclass
class Plaintext:
    """Any other line inside an entry, kept as written."""

    content: str
    id: str = field(default="", compare=False)

    type: ClassVar[str] = ContentType.PLAINTEXT

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "content": self.content}


ContentItem = Union[Bullet, Subheading, FreestandingSubheading, Plaintext]


def content_item_from_dict(data: Dict[str, Any]) -> ContentItem:
    """
    Build a content item from its dict form, dispatching on the 'type' tag.

    Raises:
        InvalidDocumentStructureError: If the type tag is missing or unknown
    """
    item_type = data.get("type")
    item_id = data.get("id", "")

    if item_type == ContentType.BULLET:
        return Bullet(content=data.get("content", ""), style=data.get("style", BulletStyle.TOP), id=item_id)
    elif item_type == ContentType.SUBHEADING:
        bullets = [
            content_item_from_dict({"type": ContentType.BULLET, "style": BulletStyle.SUB, **bullet})
            for bullet in data.get("bullets", [])
        ]
        return Subheading(title=data.get("title", ""), bullets=bullets, id=item_id)
    elif item_type == ContentType.FREESTANDING_SUBHEADING:
        return FreestandingSubheading(content=data.get("content", ""), id=item_id)
    elif item_type == ContentType.PLAINTEXT:
        return Plaintext(content=data.get("content", ""), id=item_id)
    else:
        raise InvalidDocumentStructureError(f"Unknown content item type: {item_type!r}")


# =============================================================================
# ENTRIES, SKILLS, SECTIONS
# =============================================================================


@dataclass
class ResumeEntry:
    """
    One job/degree/role block within a standard section.

    Attributes:
        title: Text before the first "|" on the entry line
        subtitle: Text after the first "|" (organization, location, ...)
        date: Trailing date fragment (e.g., "Sep 2018 – Jun 2022")
        content: Bullets, subheadings and text lines in source order
        is_boxed: Editor display flag; not represented in text
    """

    title: str = ""
    subtitle: str = ""
    date: str = ""
    content: List[ContentItem] = field(default_factory=list)
    is_boxed: bool = False
    id: str = field(default="", compare=False)

    @property
    def has_heading(self) -> bool:
        """Whether the entry has an entry line (entries opened by stray content do not)."""
        return bool(self.title or self.subtitle or self.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "date": self.date,
            "is_boxed": self.is_boxed,
            "content": [item.to_dict() for item in self.content],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeEntry":
        return cls(
            title=data.get("title", ""),
            subtitle=data.get("subtitle", ""),
            date=data.get("date", ""),
            content=[content_item_from_dict(item) for item in data.get("content", [])],
            is_boxed=bool(data.get("is_boxed", False)),
            id=data.get("id", ""),
        )


@dataclass
class Skill:
    """A "Category: details" row of a skills section."""

    category: str
    details: str
    id: str = field(default="", compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "category": self.category, "details": self.details}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Skill":
        return cls(category=data.get("category", ""), details=data.get("details", ""), id=data.get("id", ""))


@dataclass
class StandardSection:
    """A titled section made of entries (EDUCATION, PROFESSIONAL EXPERIENCE, ...)."""

    title: str
    entries: List[ResumeEntry] = field(default_factory=list)
    id: str = field(default="", compare=False)

    kind: ClassVar[str] = SectionKind.STANDARD

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "title": self.title,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass
class SkillsSection:
    """A titled section made of skill rows (SKILLS, TOOLS, ...)."""

    title: str
    skills: List[Skill] = field(default_factory=list)
    id: str = field(default="", compare=False)

    kind: ClassVar[str] = SectionKind.SKILLS

    @property
    def is_empty(self) -> bool:
        return not self.skills

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "title": self.title,
            "skills": [skill.to_dict() for skill in self.skills],
        }


ResumeSection = Union[StandardSection, SkillsSection]


def create_section(title: str, section_id: str = "") -> ResumeSection:
    """
    Create an empty section whose kind is decided by its title.

    Args:
        title: Section title (skills-like titles yield a SkillsSection)
        section_id: Identifier for the new section

    Returns:
        Empty StandardSection or SkillsSection
    """
    if is_skills_title(title):
        return SkillsSection(title=title, id=section_id)
    return StandardSection(title=title, id=section_id)


def section_from_dict(data: Dict[str, Any]) -> ResumeSection:
    """
    Build a section from its dict form.

    The 'kind' tag decides the section type; when it is missing, the content
    key present ('skills' or 'entries') decides instead.

    Raises:
        InvalidDocumentStructureError: If the kind cannot be determined
    """
    kind = data.get("kind")
    if kind is None:
        if "skills" in data:
            kind = SectionKind.SKILLS
        elif "entries" in data:
            kind = SectionKind.STANDARD

    if kind == SectionKind.SKILLS:
        return SkillsSection(
            title=data.get("title", ""),
            skills=[Skill.from_dict(skill) for skill in data.get("skills", [])],
            id=data.get("id", ""),
        )
    elif kind == SectionKind.STANDARD:
        return StandardSection(
            title=data.get("title", ""),
            entries=[ResumeEntry.from_dict(entry) for entry in data.get("entries", [])],
            id=data.get("id", ""),
        )
    raise InvalidDocumentStructureError(
        f"Cannot determine kind of section {data.get('title', '')!r}"
    )


# =============================================================================
# DOCUMENT
# =============================================================================


@dataclass
class ResumeHeader:
    """Name and contact line at the top of the resume (contact may carry markup)."""

    name: str
    contact: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "contact": self.contact}


@dataclass
class ParsedResume:
    """
    Structured representation of a complete resume.

    Created fresh by every parse, mutated in place by editor operations and
    discarded once reconstructed; the text form is the durable representation.
    """

    header: Optional[ResumeHeader] = None
    sections: List[ResumeSection] = field(default_factory=list)

    def get_section(self, title: str, case_sensitive: bool = False) -> ResumeSection:
        """
        Find the first section with the given title.

        Raises:
            KeyError: If no section has that title
        """
        for section in self.sections:
            if section.title == title or (not case_sensitive and section.title.upper() == title.upper()):
                return section
        raise KeyError(f"Section not found: {title}")

    def compacted(self) -> "ParsedResume":
        """
        Copy of this document without empty sections.

        This is the structure that survives reconstruction, which drops
        sections with no entries or skills.
        """
        return ParsedResume(
            header=self.header,
            sections=[section for section in self.sections if not section.is_empty],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_dict() if self.header else None,
            "sections": [section.to_dict() for section in self.sections],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParsedResume":
        header_data = data.get("header")
        header = (
            ResumeHeader(name=header_data.get("name", ""), contact=header_data.get("contact", ""))
            if header_data
            else None
        )
        return cls(
            header=header,
            sections=[section_from_dict(section) for section in data.get("sections", []) or []],
        )
