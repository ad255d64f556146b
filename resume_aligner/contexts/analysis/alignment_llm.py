"""
LLM-based alignment analysis of a resume against a job description.

The resume is sent as canonical resume text together with the job description;
the model answers with a JSON object that is validated into an
AlignmentAnalysis.
"""

import json
from typing import Optional, Union

from resume_aligner.contexts.analysis.analysis_data_structure import AlignmentAnalysis
from resume_aligner.contexts.analysis.exceptions import InvalidAnalysisError
from resume_aligner.contexts.analysis.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_analysis_request,
    log_analysis_response,
    log_analysis_summary,
)
from resume_aligner.contexts.editing.reconstructor import reconstruct_resume
from resume_aligner.contexts.editing.resume_data_structure import ParsedResume
from resume_aligner.utils.config import load_config
from resume_aligner.utils.llm import LLMProvider, get_provider, parse_json_object

MISSING_INPUT_MESSAGE = "Please provide both a resume and a job description."

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert career coach and resume writer. Your task is to analyze a candidate's resume \
against a given job description and provide a detailed, constructive analysis. Your analysis \
should be objective, focusing on quantifiable achievements and direct relevance to the job \
description. Avoid vague praise and focus on actionable feedback."""

_USER_PROMPT_TEMPLATE = """\
Analyze the following resume against the provided job description. Provide a detailed analysis \
to help the candidate improve their application.

**Resume:**
---
{resume_text}
---

**Job Description:**
---
{job_description}
---

Provide your analysis in a structured JSON format. Return ONLY a JSON object matching this schema \
(each value describes what the field must contain):

{schema_json}"""

# =============================================================================
# RESPONSE SCHEMA
# =============================================================================

ANALYSIS_SCHEMA = {
    "overallSummary": (
        "string, required. A high-level summary of how well the resume aligns with the job "
        "description. Should be 2-4 sentences."
    ),
    "keywordAnalysis": {
        "_description": (
            "object, required. Extract the top 10-15 most important keywords/skills from the job "
            "description, then split them into those present in the resume and those missing."
        ),
        "matchedKeywords": "array of strings, required. Important keywords also found in the resume.",
        "missingKeywords": "array of strings, required. Important keywords NOT found in the resume.",
    },
    "misalignedPoints": [
        {
            "_description": (
                "2-3 key points from the resume that are most misaligned with the job description "
                "or could be significantly improved."
            ),
            "point": "string, required. The original bullet point from the resume.",
            "reason": "string, required. Why this point is misaligned with the job description.",
            "suggestion": "string, required. A rewrite of the point that aligns better with the job.",
        }
    ],
    "categorizedPoints": [
        {
            "_description": (
                "Each relevant experience bullet point in the resume, categorized by strength. "
                "Exclude education and skills sections."
            ),
            "point": "string, required. The bullet point from the professional experience section.",
            "strength": "one of 'strong', 'medium', 'weak', required.",
            "justification": "string, required. Why the point got that strength.",
            "suggestion": (
                "string, optional. Improvement for 'weak' or 'medium' points; "
                "required for all 'weak' points."
            ),
        }
    ],
}

# =============================================================================
# ANALYSIS FUNCTIONS
# =============================================================================


def _clip(text: str, max_chars: int, label: str) -> str:
    if max_chars and len(text) > max_chars:
        _log_warning(f"{label} is {len(text)} chars; truncating to {max_chars}")
        return text[:max_chars]
    return text


def build_analysis_prompt(resume_text: str, job_description: str) -> str:
    """
    Build the user prompt for an alignment analysis.

    Args:
        resume_text: Canonical resume text
        job_description: Job description text

    Returns:
        User prompt string for the LLM
    """
    return _USER_PROMPT_TEMPLATE.format(
        resume_text=resume_text.strip(),
        job_description=job_description.strip(),
        schema_json=json.dumps(ANALYSIS_SCHEMA, indent=2),
    )


def analyze_alignment(
    resume_text: str,
    job_description: str,
    provider: Union[str, LLMProvider, None] = None,
    model: Optional[str] = None,
    config: Optional[dict] = None,
) -> AlignmentAnalysis:
    """
    Analyze how well a resume aligns with a job description.

    Args:
        resume_text: Resume text (canonical form preferred)
        job_description: Job description text
        provider: Provider name ("gemini", "openai", "anthropic"), a ready
            LLMProvider instance, or None to use the configured provider
        model: Model name override
        config: Configuration dict (default: load_config())

    Returns:
        Validated AlignmentAnalysis

    Raises:
        ValueError: If either input is blank
        InvalidAnalysisError: If the response is not a valid analysis
    """
    if not resume_text or not resume_text.strip() or not job_description or not job_description.strip():
        raise ValueError(MISSING_INPUT_MESSAGE)

    config = config or load_config()
    llm_config = config.get("llm", {})
    analysis_config = config.get("analysis", {})

    if isinstance(provider, LLMProvider):
        llm = provider
    else:
        llm = get_provider(
            provider_name=provider or llm_config.get("provider"),
            model=model or llm_config.get("model"),
            max_tokens=llm_config.get("max_tokens"),
        )

    resume_text = _clip(resume_text, analysis_config.get("max_resume_chars"), "Resume")
    job_description = _clip(
        job_description, analysis_config.get("max_job_description_chars"), "Job description"
    )

    log_analysis_request(llm.name, len(resume_text), len(job_description))
    response = llm.generate(
        system_prompt=_SYSTEM_PROMPT,
        user_prompt=build_analysis_prompt(resume_text, job_description),
        json_mode=True,
    )
    log_analysis_response(response)

    result = parse_json_object(response.content)
    try:
        analysis = AlignmentAnalysis.from_dict(result)
    except InvalidAnalysisError as e:
        e.raw_response = response.content
        _log_error(f"{e.message} ({e.reason})")
        _log_debug(f"Raw response: {response.content[:500]}")
        raise

    log_analysis_summary(analysis)
    return analysis


def analyze_document(
    document: ParsedResume,
    job_description: str,
    provider: Union[str, LLMProvider, None] = None,
    model: Optional[str] = None,
    config: Optional[dict] = None,
) -> AlignmentAnalysis:
    """
    Analyze a parsed (possibly edited) resume against a job description.

    The document is reconstructed first so the model always sees canonical
    resume text.
    """
    return analyze_alignment(
        reconstruct_resume(document),
        job_description,
        provider=provider,
        model=model,
        config=config,
    )
