"""Custom exceptions for the analysis context."""

from typing import Optional


class InvalidAnalysisError(Exception):
    """
    Exception raised when an LLM response is not a usable alignment analysis.

    Attributes:
        message: Error description shown to the user
        reason: Which part of the response was wrong (for logs)
        raw_response: The response text that failed validation
    """

    def __init__(
        self,
        message: str = "Invalid analysis result structure from API.",
        reason: Optional[str] = None,
        raw_response: Optional[str] = None,
    ):
        self.message = message
        self.reason = reason
        self.raw_response = raw_response

        super().__init__(message)
