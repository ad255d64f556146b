"""
Shared loguru setup.

Every orchestration run (parse, reconstruct, analyze) gets its own log
directory holding a DEBUG-level `<context>.log` file, while the console shows
INFO and above. Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from resume_aligner import __version__

load_dotenv()

# Console threshold; the log file always records DEBUG
CONSOLE_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
) -> Path:
    """
    Route loguru output to a run directory and the console.

    Replaces any previously configured sinks, so each run writes only to its
    own log file.

    Args:
        context_name: Context identifier, used as the log file name
            (e.g., "editor", "analysis")
        log_dir: Directory for this run (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Console color overrides (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger(
            context_name="editor",
            log_dir=Path("outs/logs/parse_20251114_123456"),
            extra_provenance={"Phase": "parse"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=CONSOLE_LEVEL, colorize=True)

    log_provenance({"Context": context_name, "Log directory": log_dir, **(extra_provenance or {})})

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """
    Write a provenance header: command line, working directory, interpreter
    and package version, followed by any extra key-value pairs.
    """
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]} | resume_aligner: {__version__}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
