"""
Analysis context logger.

Provides logging interface for the analysis context with automatic [analysis] prefix.
All analysis modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resume_aligner.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[analysis]"


def setup_analysis_logger(log_dir: Path, provider_name: str = None) -> Path:
    """
    Setup logger for the analysis context.

    Args:
        log_dir: Directory for this analysis session
        provider_name: LLM provider/model recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="analysis",
        log_dir=log_dir,
        extra_provenance={"LLM provider": provider_name} if provider_name else None,
    )


# Wrapper functions with automatic [analysis] prefix


def _log_info(message: str) -> None:
    """Log info message with [analysis] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [analysis] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [analysis] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [analysis] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [analysis] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level analysis-specific logging helpers


def log_analysis_request(provider_name: str, resume_chars: int, job_description_chars: int) -> None:
    """Log the size of an outgoing analysis request."""
    _log_info(f"Requesting alignment analysis from {provider_name}")
    _log_debug(f"Resume: {resume_chars} chars, job description: {job_description_chars} chars")


def log_analysis_response(response) -> None:
    """Log token usage of an LLMResponse."""
    _log_debug(
        f"Response from {response.model}: "
        f"{response.input_tokens} input / {response.output_tokens} output tokens"
    )


def log_analysis_summary(analysis) -> None:
    """Log counts from an AlignmentAnalysis."""
    keywords = analysis.keyword_analysis
    _log_success(
        f"Analysis complete: {len(keywords.matched_keywords)} matched / "
        f"{len(keywords.missing_keywords)} missing keywords, "
        f"{len(analysis.misaligned_points)} misaligned point(s)"
    )
    counts = analysis.strength_counts()
    _log_info(
        f"  Points by strength: strong={counts['strong']}, "
        f"medium={counts['medium']}, weak={counts['weak']}"
    )
