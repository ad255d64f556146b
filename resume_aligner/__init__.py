"""
resume_aligner - Resume editing and job-description alignment analysis

Parses free-form, tab-delimited resume text into a structured document,
supports in-place editing of that document, reconstructs canonical text from
it, and asks an LLM how well the resume aligns with a target job description.

Architecture:
- Editing Context: Resume text parsing, document model, editing and reconstruction
- Analysis Context: LLM-backed resume/job-description alignment critique
"""

__version__ = "0.1.0"
