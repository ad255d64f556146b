"""
Coarse section splitting.

Splits raw resume text into titled blocks of text without interpreting their
contents, for editing a resume one section at a time. Joining the blocks back
gives text the full parser reads the same way as the original.
"""

from dataclasses import dataclass
from typing import List

from resume_aligner.contexts.editing.line_classifier import match_section_header
from resume_aligner.utils.text_processing import normalize_newlines

HEADER_SECTION_TITLE = "Header"


@dataclass
class RawSection:
    """
    A section title and its unparsed body text.

    Attributes:
        id: "{title}-{index}" identifier, unique within one split
        title: Section title, or "Header" for text above the first section
        content: Body text with surrounding blank lines trimmed
    """

    id: str
    title: str
    content: str


def split_sections(text: str) -> List[RawSection]:
    """
    Split resume text on section-header lines.

    Everything before the first recognized header goes into a "Header" block,
    which is dropped when it is empty.

    Example:
        >>> [s.title for s in split_sections("Jane\\tjane@x.com\\n\\nSKILLS\\nPython")]
        ['Header', 'SKILLS']
    """
    if not text:
        return []

    sections: List[RawSection] = []
    title = HEADER_SECTION_TITLE
    body: List[str] = []

    def flush() -> None:
        content = "\n".join(body).strip()
        if title == HEADER_SECTION_TITLE and not content:
            return
        sections.append(RawSection(id=f"{title}-{len(sections)}", title=title, content=content))

    for line in normalize_newlines(text).split("\n"):
        header = match_section_header(line)
        if header:
            flush()
            title = header
            body = []
        else:
            body.append(line)

    flush()
    return sections


def join_sections(sections: List[RawSection]) -> str:
    """
    Rebuild resume text from raw sections.

    The "Header" block is written bare; every other block is written as its
    title line followed by its content. Blocks are separated by a blank line.
    """
    blocks = []
    for section in sections:
        if section.title == HEADER_SECTION_TITLE:
            blocks.append(section.content)
        elif section.content:
            blocks.append(f"{section.title}\n{section.content}")
        else:
            blocks.append(section.title)
    return "\n\n".join(blocks)
