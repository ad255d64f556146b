"""Custom exceptions for the editing context."""

from typing import Optional


class ItemNotFoundError(KeyError):
    """
    Exception raised when an edit operation references an unknown identifier.

    Attributes:
        item_type: Kind of item looked up (e.g., 'entry', 'skill')
        item_id: The identifier that was not found
    """

    def __init__(self, item_type: str, item_id: str):
        self.item_type = item_type
        self.item_id = item_id
        super().__init__(f"No {item_type} with id '{item_id}'")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class SectionKindError(TypeError):
    """
    Exception raised when an operation does not fit a section's kind.

    Standard sections own entries and skills sections own skills; a section can
    never hold both.
    """

    def __init__(self, message: str, section_title: Optional[str] = None):
        self.message = message
        self.section_title = section_title

        if section_title:
            message = f"{message} (section: {section_title})"

        super().__init__(message)


class InvalidDocumentStructureError(ValueError):
    """
    Exception raised when a stored document dict does not match the schema
    (unknown content type, missing section kind, etc.).
    """

    pass
