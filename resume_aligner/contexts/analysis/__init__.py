"""
Analysis Context

Responsibilities:
- Builds the alignment prompt from canonical resume text and a job description
- Calls the configured LLM provider
- Validates the JSON response into an AlignmentAnalysis
- Formats analyses for display

Owns: Resume vs job description alignment analysis
Never: Parses or edits resume structure (delegates to the editing context)
"""

from resume_aligner.contexts.analysis.alignment_llm import analyze_alignment, analyze_document
from resume_aligner.contexts.analysis.analysis_data_structure import (
    AlignmentAnalysis,
    KeywordAnalysis,
    MisalignedPoint,
    ResumePointAnalysis,
)
from resume_aligner.contexts.analysis.exceptions import InvalidAnalysisError

__all__ = [
    "analyze_alignment",
    "analyze_document",
    "AlignmentAnalysis",
    "KeywordAnalysis",
    "MisalignedPoint",
    "ResumePointAnalysis",
    "InvalidAnalysisError",
]
