"""
Alignment Analysis Structure

Typed form of the JSON object the LLM returns when a resume is analyzed
against a job description. The JSON keys are camelCase; attributes here are
snake_case, and `to_dict()` writes the camelCase form back out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from resume_aligner.contexts.analysis.exceptions import InvalidAnalysisError


class Strength:
    """Enum-like class for resume point strength ratings"""

    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"

    @classmethod
    def all(cls) -> List[str]:
        return [cls.STRONG, cls.MEDIUM, cls.WEAK]


def _require_str(data: Dict[str, Any], key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidAnalysisError(reason=f"{context}: '{key}' must be a non-empty string")
    return value.strip()


def _str_list(data: Dict[str, Any], key: str, context: str) -> List[str]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise InvalidAnalysisError(reason=f"{context}: '{key}' must be a list")
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass
class KeywordAnalysis:
    """Important job-description keywords found in and missing from the resume."""

    matched_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeywordAnalysis":
        if not isinstance(data, dict):
            raise InvalidAnalysisError(reason="'keywordAnalysis' must be an object")
        return cls(
            matched_keywords=_str_list(data, "matchedKeywords", "keywordAnalysis"),
            missing_keywords=_str_list(data, "missingKeywords", "keywordAnalysis"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"matchedKeywords": self.matched_keywords, "missingKeywords": self.missing_keywords}


@dataclass
class MisalignedPoint:
    """A resume point that fits the job poorly, with a suggested rewrite."""

    point: str
    reason: str
    suggestion: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MisalignedPoint":
        if not isinstance(data, dict):
            raise InvalidAnalysisError(reason="misaligned point must be an object")
        return cls(
            point=_require_str(data, "point", "misalignedPoints"),
            reason=_require_str(data, "reason", "misalignedPoints"),
            suggestion=_require_str(data, "suggestion", "misalignedPoints"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"point": self.point, "reason": self.reason, "suggestion": self.suggestion}


@dataclass
class ResumePointAnalysis:
    """
    One experience bullet rated against the job description.

    Attributes:
        point: Bullet text as it appears in the resume
        strength: "strong", "medium" or "weak"
        justification: Why the point got that rating
        suggestion: Optional improvement (expected for weak points)
    """

    point: str
    strength: str
    justification: str
    suggestion: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumePointAnalysis":
        if not isinstance(data, dict):
            raise InvalidAnalysisError(reason="categorized point must be an object")

        strength = _require_str(data, "strength", "categorizedPoints").lower()
        if strength not in Strength.all():
            raise InvalidAnalysisError(
                reason=f"categorizedPoints: unknown strength {strength!r}, expected one of {Strength.all()}"
            )

        suggestion = data.get("suggestion")
        return cls(
            point=_require_str(data, "point", "categorizedPoints"),
            strength=strength,
            justification=_require_str(data, "justification", "categorizedPoints"),
            suggestion=suggestion.strip() if isinstance(suggestion, str) and suggestion.strip() else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"point": self.point, "strength": self.strength, "justification": self.justification}
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class AlignmentAnalysis:
    """Complete resume vs job description analysis."""

    overall_summary: str
    keyword_analysis: KeywordAnalysis
    misaligned_points: List[MisalignedPoint] = field(default_factory=list)
    categorized_points: List[ResumePointAnalysis] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "AlignmentAnalysis":
        """
        Validate and convert the LLM's JSON object.

        The four top-level keys are required: overallSummary must be a
        non-empty string, keywordAnalysis an object, misalignedPoints and
        categorizedPoints lists.

        Raises:
            InvalidAnalysisError: If any part of the structure is wrong
        """
        if not isinstance(data, dict):
            raise InvalidAnalysisError(reason="response is not a JSON object")

        if (
            not data.get("overallSummary")
            or not data.get("keywordAnalysis")
            or not isinstance(data.get("misalignedPoints"), list)
            or not isinstance(data.get("categorizedPoints"), list)
        ):
            missing = [
                key
                for key in ("overallSummary", "keywordAnalysis", "misalignedPoints", "categorizedPoints")
                if key not in data
            ]
            raise InvalidAnalysisError(reason=f"missing or malformed top-level keys (absent: {missing})")

        return cls(
            overall_summary=_require_str(data, "overallSummary", "analysis"),
            keyword_analysis=KeywordAnalysis.from_dict(data["keywordAnalysis"]),
            misaligned_points=[MisalignedPoint.from_dict(item) for item in data["misalignedPoints"]],
            categorized_points=[ResumePointAnalysis.from_dict(item) for item in data["categorizedPoints"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallSummary": self.overall_summary,
            "keywordAnalysis": self.keyword_analysis.to_dict(),
            "misalignedPoints": [point.to_dict() for point in self.misaligned_points],
            "categorizedPoints": [point.to_dict() for point in self.categorized_points],
        }

    def points_by_strength(self, strength: str) -> List[ResumePointAnalysis]:
        return [point for point in self.categorized_points if point.strength == strength]

    def strength_counts(self) -> Dict[str, int]:
        return {strength: len(self.points_by_strength(strength)) for strength in Strength.all()}
