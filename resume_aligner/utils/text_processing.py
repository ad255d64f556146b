"""
Text processing utilities for formatting and comparison.
"""

import difflib
import re
from typing import List, Tuple


def normalize_newlines(text: str) -> str:
    """
    Convert Windows and old Mac line endings to "\\n".

    Example:
        >>> normalize_newlines("a\\r\\nb\\rc")
        'a\\nb\\nc'
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    # max_consecutive=0 removes single blank lines too
    if max_consecutive == 0:
        pattern = r"\n[ \t]*\n([ \t]*\n)*"
    else:
        pattern = r"\n[ \t]*\n([ \t]*\n)+"

    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)


def get_text_diff(
    text1: str,
    text2: str,
    label1: str = "original",
    label2: str = "reconstructed",
    context_lines: int = 3,
) -> Tuple[List[str], int]:
    """
    Compare two texts ignoring blank line differences.

    Removes all blank lines and trailing whitespace from both texts before
    comparing, since the reconstructor is free to re-space sections.

    Args:
        text1: First text to compare
        text2: Second text to compare
        label1: Name shown for text1 in the diff header
        label2: Name shown for text2 in the diff header
        context_lines: Number of context lines around differences (default: 3)

    Returns:
        Tuple of (diff_lines, num_differences):
        - diff_lines: List of unified diff output lines
        - num_differences: Count of added/removed lines (excluding headers)

    Example:
        >>> diff_lines, num_diffs = get_text_diff("a\\n\\nb\\n", "a\\nb")
        >>> num_diffs
        0
    """
    lines1 = [
        line.rstrip()
        for line in set_max_consecutive_blank_lines(text1.strip(), max_consecutive=0).split("\n")
    ]
    lines2 = [
        line.rstrip()
        for line in set_max_consecutive_blank_lines(text2.strip(), max_consecutive=0).split("\n")
    ]

    if lines1 == lines2:
        return [], 0

    diff = list(
        difflib.unified_diff(
            lines1,
            lines2,
            fromfile=label1,
            tofile=label2,
            lineterm="",
            n=context_lines,
        )
    )

    num_diffs = sum(1 for line in diff if line.startswith(("+", "-")))
    header_lines = sum(1 for line in diff if line.startswith(("---", "+++")))
    num_diffs -= header_lines

    return diff, num_diffs
