"""
Resume text <-> YAML Converter

Main module providing file-level conversion between resume text and its
structured YAML form, plus round-trip validation.

This module exports:
- Serialization: document_to_yaml, document_from_yaml
- Validation: validate_roundtrip
- Orchestration: parse_resume_file, reconstruct_resume_file (with logging)
"""

import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from resume_aligner.contexts.editing.exceptions import InvalidDocumentStructureError
from resume_aligner.contexts.editing.logger import (
    _log_debug,
    log_conversion_result,
    log_conversion_start,
    log_document_summary,
    setup_editing_logger,
)
from resume_aligner.contexts.editing.reconstructor import reconstruct_resume
from resume_aligner.contexts.editing.resume_data_structure import IdGenerator, ParsedResume
from resume_aligner.contexts.editing.resume_parser import parse_resume
from resume_aligner.utils.text_processing import get_text_diff
from resume_aligner.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


# Result dataclasses for orchestration functions


@dataclass
class ConversionResult:
    """Result from parse_resume_file() or reconstruct_resume_file()."""

    success: bool
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    error: Optional[str] = None
    time_s: float = 0.0
    log_dir: Optional[Path] = None
    # Validation results
    text_diffs: Optional[int] = None
    structure_matches: Optional[bool] = None


@dataclass
class RoundtripResult:
    """
    Result of a parse -> reconstruct -> parse cycle.

    Attributes:
        structure_matches: Whether the re-parsed document equals the first parse
            (empty sections excluded, identifiers ignored)
        text_diffs: Changed lines between source and canonical text, ignoring
            blank lines and trailing whitespace
        diff_lines: Unified diff of source vs canonical text
        reconstructed: The canonical text
    """

    structure_matches: bool
    text_diffs: int
    diff_lines: List[str] = field(default_factory=list)
    reconstructed: str = ""


# =============================================================================
# SERIALIZATION
# =============================================================================

# A run of backslashes followed by "${" (OmegaConf interpolation syntax)
_INTERPOLATION_START = re.compile(r"(\\*)\$\{")
_ESCAPED_INTERPOLATION_START = re.compile(r"(\\+)\$\{")


def _escape_interpolations(value: Any) -> Any:
    """
    Escape "${" in every string so OmegaConf stores resume text literally.

    Backslashes already in front of "${" are doubled, following OmegaConf's
    escaping rules, so unbalanced text such as "${HOME and ${" is accepted.
    """
    if isinstance(value, str):
        return _INTERPOLATION_START.sub(lambda m: m.group(1) * 2 + "\\${", value)
    if isinstance(value, dict):
        return {key: _escape_interpolations(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_escape_interpolations(item) for item in value]
    return value


def _unescape_interpolations(value: Any) -> Any:
    """Inverse of _escape_interpolations(); unescaped "${" is left as-is."""
    if isinstance(value, str):
        return _ESCAPED_INTERPOLATION_START.sub(lambda m: m.group(1)[: len(m.group(1)) // 2] + "${", value)
    if isinstance(value, dict):
        return {key: _unescape_interpolations(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_unescape_interpolations(item) for item in value]
    return value


def document_to_yaml(document: ParsedResume, output_path: Path) -> None:
    """
    Write a document to YAML.

    Args:
        document: Parsed resume
        output_path: Destination .yaml file (parent directories are created)
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    conf = OmegaConf.create(_escape_interpolations(document.to_dict()))
    OmegaConf.save(conf, output_path)

    # Strip trailing blank lines for consistency
    content = output_path.read_text(encoding="utf-8")
    output_path.write_text(content.rstrip() + "\n", encoding="utf-8")


def document_from_yaml(yaml_path: Path) -> ParsedResume:
    """
    Load a document from YAML written by document_to_yaml().

    Raises:
        InvalidDocumentStructureError: If the YAML does not describe a document
    """
    conf = OmegaConf.load(yaml_path)
    # Resume text may contain "${"; never treat it as an interpolation
    data = _unescape_interpolations(OmegaConf.to_container(conf, resolve=False))

    if not isinstance(data, dict) or "sections" not in data:
        raise InvalidDocumentStructureError(
            f"{yaml_path.name} must contain a 'sections' key at root level"
        )
    return ParsedResume.from_dict(data)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_roundtrip(text: str, id_generator: Optional[IdGenerator] = None) -> RoundtripResult:
    """
    Parse, reconstruct and re-parse resume text.

    The structure check compares the re-parsed document with the first parse
    minus its empty sections, since the reconstructor never writes those out.

    Args:
        text: Resume text
        id_generator: Optional identifier generator for both parses

    Returns:
        RoundtripResult
    """
    document = parse_resume(text, id_generator=id_generator)
    reconstructed = reconstruct_resume(document)
    reparsed = parse_resume(reconstructed, id_generator=id_generator)

    diff_lines, num_diffs = get_text_diff(text, reconstructed)

    return RoundtripResult(
        structure_matches=(reparsed == document.compacted()),
        text_diffs=num_diffs,
        diff_lines=diff_lines,
        reconstructed=reconstructed,
    )


# =============================================================================
# ORCHESTRATION
# =============================================================================


def parse_resume_file(
    input_path: Path,
    output_path: Optional[Path] = None,
    strict: bool = False,
) -> ConversionResult:
    """
    Parse a resume text file to YAML with round-trip validation and logging.

    Args:
        input_path: Resume text file
        output_path: Destination YAML (default: input path with .yaml suffix)
        strict: Treat a round-trip structure mismatch as a failure

    Returns:
        ConversionResult with paths, validation info and timing
    """
    start_time = time.time()
    resume_name = input_path.stem
    output_path = output_path or input_path.with_suffix(".yaml")

    log_dir = LOGS_PATH / f"parse_{now()}"
    log_file = setup_editing_logger(log_dir, phase="parse")
    log_conversion_start(resume_name, input_path, log_file, "parse")

    try:
        text = input_path.read_text(encoding="utf-8")
        document = parse_resume(text)
        log_document_summary(document)

        roundtrip = validate_roundtrip(text)
        if roundtrip.diff_lines:
            diff_file = log_dir / "text_roundtrip.diff"
            diff_file.write_text("\n".join(roundtrip.diff_lines), encoding="utf-8")
            _log_debug(f"Wrote text diff to {diff_file}")

        result = ConversionResult(
            success=True,
            input_path=input_path,
            log_dir=log_dir,
            text_diffs=roundtrip.text_diffs,
            structure_matches=roundtrip.structure_matches,
        )

        if strict and not roundtrip.structure_matches:
            result.success = False
            result.error = "Roundtrip validation failed"
        else:
            document_to_yaml(document, output_path)
            result.output_path = output_path

    except (OSError, UnicodeDecodeError) as e:
        result = ConversionResult(success=False, input_path=input_path, log_dir=log_dir, error=str(e))

    result.time_s = time.time() - start_time
    log_conversion_result(resume_name, result, result.time_s, "parse")
    return result


def reconstruct_resume_file(yaml_path: Path, output_path: Optional[Path] = None) -> ConversionResult:
    """
    Reconstruct resume text from a YAML document with validation and logging.

    The written text is re-parsed and compared with the loaded document
    (empty sections excluded) to report whether the structure survived.

    Args:
        yaml_path: YAML written by parse_resume_file() or document_to_yaml()
        output_path: Destination text file (default: yaml path with .txt suffix)

    Returns:
        ConversionResult with paths, validation info and timing
    """
    start_time = time.time()
    resume_name = yaml_path.stem
    output_path = output_path or yaml_path.with_suffix(".txt")

    log_dir = LOGS_PATH / f"reconstruct_{now()}"
    log_file = setup_editing_logger(log_dir, phase="reconstruct")
    log_conversion_start(resume_name, yaml_path, log_file, "reconstruct")

    try:
        document = document_from_yaml(yaml_path)
        log_document_summary(document)

        text = reconstruct_resume(document)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")

        result = ConversionResult(
            success=True,
            input_path=yaml_path,
            output_path=output_path,
            log_dir=log_dir,
            structure_matches=(parse_resume(text) == document.compacted()),
        )

    except (OSError, InvalidDocumentStructureError, OmegaConfBaseException) as e:
        result = ConversionResult(success=False, input_path=yaml_path, log_dir=log_dir, error=str(e))

    result.time_s = time.time() - start_time
    log_conversion_result(resume_name, result, result.time_s, "reconstruct")
    return result
