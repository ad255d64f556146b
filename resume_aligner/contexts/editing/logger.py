"""
Editing context logger.

Provides logging interface for the editing context with automatic [editor] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resume_aligner.contexts.editing.resume_data_structure import SectionKind
from resume_aligner.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[editor]"


def setup_editing_logger(log_dir: Path, phase: str = "parse") -> Path:
    """
    Setup logger for the editing context.

    Args:
        log_dir: Directory for this session
        phase: Phase name for provenance ("parse", "reconstruct" or "roundtrip")

    Returns:
        Path to log file

    Example:
        from resume_aligner.contexts.editing.logger import setup_editing_logger, _log_info

        log_file = setup_editing_logger(log_dir, phase="parse")
        _log_info("Starting parsing...")
    """
    return _setup_logger(
        context_name="editor",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [editor] prefix


def _log_info(message: str) -> None:
    """Log info message with [editor] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [editor] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [editor] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [editor] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [editor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level editing-specific logging helpers


def log_conversion_start(resume_name: str, input_path: Path, log_file: Path, phase_name: str) -> None:
    """Log start of conversion with context."""
    _log_info(f"Starting to {phase_name} {resume_name}")
    _log_info(f"Log file: {log_file}")
    _log_debug(f"Source: {input_path}")


def log_conversion_result(
    resume_name: str,
    result,  # ConversionResult
    elapsed_time: float,
    phase_name: str,
) -> None:
    """
    Log conversion result with round-trip validation details.

    Args:
        resume_name: Resume identifier (file stem)
        result: ConversionResult from parse_resume_file() or reconstruct_resume_file()
        elapsed_time: Time taken
        phase_name: "parse" or "reconstruct"
    """
    if result.structure_matches is not None:
        if result.structure_matches:
            _log_success(f"Roundtrip validation passed (text diffs: {result.text_diffs})")
        else:
            _log_warning(f"Roundtrip structure mismatch (text diffs: {result.text_diffs})")

    if result.success:
        _log_success(f"{resume_name}: {phase_name} succeeded ({elapsed_time:.2f}s)")
        if result.output_path:
            _log_info(f"  Output: {result.output_path}")
    else:
        _log_error(f"Failed to {phase_name} {resume_name} ({elapsed_time:.2f}s)")
        if result.error:
            _log_error(f"  Error: {result.error}")


def log_document_summary(document) -> None:
    """Log a one-line-per-section summary of a parsed document at DEBUG level."""
    header = document.header.name if document.header else "(none)"
    _log_debug(f"Header: {header}")
    for section in document.sections:
        if section.kind == SectionKind.SKILLS:
            _log_debug(f"  {section.title}: {len(section.skills)} skill(s)")
        else:
            items = sum(len(entry.content) for entry in section.entries)
            _log_debug(f"  {section.title}: {len(section.entries)} entr(y/ies), {items} item(s)")
