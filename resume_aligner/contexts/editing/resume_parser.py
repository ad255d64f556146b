"""
Resume text parser.

Converts free-form, tab-delimited resume text into a ParsedResume in a single
pass. Every line is classified by line_classifier and fed to a small state
machine:

    AWAITING_HEADER -> IN_PREAMBLE -> IN_SECTION -> IN_ENTRY

The parser never raises. Lines it cannot place are absorbed: anything before
the first section header (other than the name/contact line) is discarded, and
unrecognized lines inside a section become plaintext.
"""

from typing import List, Optional

from resume_aligner.contexts.editing.line_classifier import (
    BlankLine,
    BulletLine,
    DatedEntryLine,
    FreestandingSubheadingLine,
    PlaintextLine,
    SectionHeaderLine,
    SkillLine,
    SubBulletLine,
    SubheadingLine,
    classify_line,
    match_header_line,
    match_section_header,
)
from resume_aligner.contexts.editing.logger import _log_debug
from resume_aligner.contexts.editing.resume_data_structure import (
    Bullet,
    BulletStyle,
    FreestandingSubheading,
    IdGenerator,
    ParsedResume,
    Plaintext,
    ResumeEntry,
    ResumeHeader,
    ResumeSection,
    Skill,
    SkillsSection,
    Subheading,
    create_section,
)
from resume_aligner.utils.text_processing import normalize_newlines, truncate_display


class ParserState:
    """
    Enum-like class for parser states.

    AWAITING_HEADER -> IN_PREAMBLE on the first non-blank line; lines are
    discarded until a section header moves to IN_SECTION; content or a dated
    line moves to IN_ENTRY, and the next section header back to IN_SECTION.
    """

    AWAITING_HEADER = "awaiting_header"
    IN_PREAMBLE = "in_preamble"
    IN_SECTION = "in_section"
    IN_ENTRY = "in_entry"


class LineScanner:
    """
    Line iterator with one line of lookahead past blank lines.

    `peek_nonblank()` returns the next non-blank line after the one most
    recently yielded, without consuming it. The scan position for lookahead
    only ever moves forward, so a full pass stays O(n).
    """

    def __init__(self, text: str):
        self._lines = normalize_newlines(text).split("\n") if text else []
        self._pos = 0
        self._scan_from = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        if self._pos >= len(self._lines):
            raise StopIteration
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def peek_nonblank(self) -> Optional[str]:
        index = max(self._pos, self._scan_from)
        while index < len(self._lines) and not self._lines[index].strip():
            index += 1
        # Everything between _pos and index is known to be blank
        self._scan_from = index
        return self._lines[index] if index < len(self._lines) else None


class ResumeParser:
    """
    Single-pass resume text parser.

    Args:
        id_generator: Callable producing item identifiers (default: uuid4).
            Pass a SequentialIdGenerator for deterministic ids.

    Example:
        >>> parser = ResumeParser()
        >>> document = parser.parse("Jane Doe\\tjane@example.com\\n\\nSKILLS\\nPython")
        >>> document.header.name, document.sections[0].skills[0].category
        ('Jane Doe', 'General')
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        self.ids = id_generator or IdGenerator()
        self._reset()

    def _reset(self) -> None:
        self.state = ParserState.AWAITING_HEADER
        self.header: Optional[ResumeHeader] = None
        self.sections: List[ResumeSection] = []
        self.current_section: Optional[ResumeSection] = None
        self.current_entry: Optional[ResumeEntry] = None
        self.discarded: List[str] = []

    def parse(self, text: str) -> ParsedResume:
        """
        Parse resume text into a fresh ParsedResume.

        Args:
            text: Raw resume text (any line endings)

        Returns:
            ParsedResume; empty input yields no header and no sections
        """
        self._reset()
        scanner = LineScanner(text or "")

        for line in scanner:
            if not line.strip():
                continue

            if self.state == ParserState.AWAITING_HEADER:
                # Header detection never blocks progress
                self.state = ParserState.IN_PREAMBLE
                if not match_section_header(line):
                    header = match_header_line(line)
                    if header:
                        self.header = ResumeHeader(name=header.name, contact=header.contact)
                        continue

            classified = classify_line(
                line,
                lookahead=scanner.peek_nonblank,
                in_skills_section=isinstance(self.current_section, SkillsSection),
            )
            self._consume(classified, line)

        self._close_section()

        if self.discarded:
            _log_debug(
                f"Discarded {len(self.discarded)} line(s) before the first section header: "
                f"'{truncate_display(self.discarded[0].strip(), 60)}'"
            )

        return ParsedResume(header=self.header, sections=self.sections)

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def _consume(self, classified, line: str) -> None:
        if isinstance(classified, BlankLine):
            return

        if isinstance(classified, SectionHeaderLine):
            self._open_section(classified.title)
            return

        if self.state == ParserState.IN_PREAMBLE:
            self.discarded.append(line)
            return

        if isinstance(classified, SkillLine):
            self.current_section.skills.append(
                Skill(category=classified.category, details=classified.details, id=self.ids())
            )
            return

        if isinstance(classified, DatedEntryLine):
            self.current_entry = ResumeEntry(
                title=classified.title,
                subtitle=classified.subtitle,
                date=classified.date,
                id=self.ids(),
            )
            self.current_section.entries.append(self.current_entry)
            self.state = ParserState.IN_ENTRY
            return

        self._append_content(self._entry_for_content(), classified)

    def _open_section(self, title: str) -> None:
        self._close_section()
        self.current_section = create_section(title, section_id=self.ids())
        self.current_entry = None
        self.state = ParserState.IN_SECTION

    def _close_section(self) -> None:
        if self.current_section is not None:
            self.sections.append(self.current_section)
        self.current_section = None
        self.current_entry = None

    def _entry_for_content(self) -> ResumeEntry:
        """
        Entry that receives a content line.

        Content appearing in a standard section before any dated entry line
        (a SUMMARY paragraph, for instance) opens an entry without a heading.
        """
        if self.state != ParserState.IN_ENTRY:
            self.current_entry = ResumeEntry(id=self.ids())
            self.current_section.entries.append(self.current_entry)
            self.state = ParserState.IN_ENTRY
        return self.current_entry

    def _append_content(self, entry: ResumeEntry, classified) -> None:
        if isinstance(classified, BulletLine):
            entry.content.append(Bullet(content=classified.content, style=BulletStyle.TOP, id=self.ids()))

        elif isinstance(classified, SubheadingLine):
            subheading = Subheading(title=classified.title, id=self.ids())
            if classified.seed:
                subheading.bullets.append(
                    Bullet(content=classified.seed, style=BulletStyle.SUB, id=self.ids())
                )
            entry.content.append(subheading)

        elif isinstance(classified, SubBulletLine):
            bullet = Bullet(content=classified.content, style=BulletStyle.SUB, id=self.ids())
            if entry.content and isinstance(entry.content[-1], Subheading):
                entry.content[-1].bullets.append(bullet)
            else:
                entry.content.append(bullet)

        elif isinstance(classified, FreestandingSubheadingLine):
            entry.content.append(FreestandingSubheading(content=classified.content, id=self.ids()))

        elif isinstance(classified, PlaintextLine):
            entry.content.append(Plaintext(content=classified.content, id=self.ids()))


def parse_resume(text: str, id_generator: Optional[IdGenerator] = None) -> ParsedResume:
    """
    Parse resume text into a structured document.

    Never raises; returns a best-effort structure for any input.

    Args:
        text: Raw resume text
        id_generator: Optional identifier generator (default: uuid4)

    Returns:
        ParsedResume
    """
    return ResumeParser(id_generator=id_generator).parse(text)
