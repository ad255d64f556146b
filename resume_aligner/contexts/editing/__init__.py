"""
Editing Context

Responsibilities:
- Manages the structured resume representation (header, sections, entries, skills)
- Parses tab-delimited resume text into that structure
- Reconstructs canonical resume text from the structure
- Applies in-place edit operations (add, update, delete)
- Serializes documents to YAML and validates text round trips

Owns: Resume text <-> structured document conversion, edit operations
Never: Judges resume content or talks to an LLM
"""

from resume_aligner.contexts.editing.converter import (
    ConversionResult,
    RoundtripResult,
    document_from_yaml,
    document_to_yaml,
    parse_resume_file,
    reconstruct_resume_file,
    validate_roundtrip,
)
from resume_aligner.contexts.editing.reconstructor import reconstruct_resume
from resume_aligner.contexts.editing.resume_data_structure import (
    ParsedResume,
    SequentialIdGenerator,
)
from resume_aligner.contexts.editing.resume_parser import parse_resume

__all__ = [
    # Core conversion
    "parse_resume",
    "reconstruct_resume",
    # Serialization and validation orchestrators
    "document_to_yaml",
    "document_from_yaml",
    "validate_roundtrip",
    "parse_resume_file",
    "reconstruct_resume_file",
    "ConversionResult",
    "RoundtripResult",
    # Data structure classes
    "ParsedResume",
    "SequentialIdGenerator",
]
