"""
Shared utilities for resume_aligner.

Common functionality used across contexts:
- Inline markup handling
- Text comparison
- LLM provider access
- Configuration management
"""

from resume_aligner.utils.markup import strip_markup
from resume_aligner.utils.timestamp import now

__all__ = ["strip_markup", "now"]
