"""
Unit tests for the alignment analysis context.

Tests response validation (analysis_data_structure), the LLM request flow
(alignment_llm) and the markdown report. Providers are faked; no API calls.
"""

import json

import pytest

from resume_aligner.contexts.analysis.alignment_llm import (
    MISSING_INPUT_MESSAGE,
    analyze_alignment,
    analyze_document,
    build_analysis_prompt,
)
from resume_aligner.contexts.analysis.analysis_data_structure import AlignmentAnalysis, Strength
from resume_aligner.contexts.analysis.exceptions import InvalidAnalysisError
from resume_aligner.contexts.analysis.markdown_formatter import format_analysis_markdown
from resume_aligner.contexts.editing.reconstructor import reconstruct_resume
from resume_aligner.contexts.editing.resume_parser import parse_resume

CONFIG = {
    "llm": {"provider": "gemini", "model": None, "max_tokens": 8192},
    "analysis": {"max_resume_chars": 20000, "max_job_description_chars": 20000},
}

VALID_ANALYSIS = {
    "overallSummary": "Strong forecasting background; light on cloud data tooling.",
    "keywordAnalysis": {
        "matchedKeywords": ["Python", "SQL", "demand forecasting"],
        "missingKeywords": ["Airflow", "dbt"],
    },
    "misalignedPoints": [
        {
            "point": "Received the 2019 analyst of the year award",
            "reason": "Recognition without measurable impact.",
            "suggestion": "Name the result that earned the award.",
        }
    ],
    "categorizedPoints": [
        {
            "point": "Rebuilt the weekly forecast in Python, cutting MAPE by 18%",
            "strength": "Strong",
            "justification": "Quantified forecasting result in the required language.",
        },
        {
            "point": "Led a team of 4 analysts across two regions",
            "strength": "medium",
            "justification": "Leadership is relevant but impact is not stated.",
            "suggestion": "Add what the team delivered.",
        },
        {
            "point": "Built safety stock models in SQL and Excel",
            "strength": "weak",
            "justification": "No outcome given.",
            "suggestion": "Quantify the stockout or inventory reduction.",
        },
    ],
}


class TestAlignmentAnalysisFromDict:
    """Tests for response validation."""

    def test_valid(self):
        """Test parsing a complete camelCase response."""
        analysis = AlignmentAnalysis.from_dict(VALID_ANALYSIS)

        assert analysis.keyword_analysis.missing_keywords == ["Airflow", "dbt"]
        assert analysis.misaligned_points[0].suggestion == "Name the result that earned the award."
        assert [point.strength for point in analysis.categorized_points] == ["strong", "medium", "weak"]
        assert analysis.categorized_points[0].suggestion is None
        assert analysis.strength_counts() == {Strength.STRONG: 1, Strength.MEDIUM: 1, Strength.WEAK: 1}

    def test_to_dict_uses_response_keys(self):
        """Test that to_dict() writes the response key names back."""
        data = AlignmentAnalysis.from_dict(VALID_ANALYSIS).to_dict()
        assert set(data) == {"overallSummary", "keywordAnalysis", "misalignedPoints", "categorizedPoints"}
        assert data["categorizedPoints"][0] == {
            "point": "Rebuilt the weekly forecast in Python, cutting MAPE by 18%",
            "strength": "strong",
            "justification": "Quantified forecasting result in the required language.",
        }

    @pytest.mark.parametrize(
        "key", ["overallSummary", "keywordAnalysis", "misalignedPoints", "categorizedPoints"]
    )
    def test_missing_top_level_key(self, key):
        """Test that each top-level key is required."""
        data = {name: value for name, value in VALID_ANALYSIS.items() if name != key}
        with pytest.raises(InvalidAnalysisError) as exc_info:
            AlignmentAnalysis.from_dict(data)
        assert key in exc_info.value.reason

    def test_points_must_be_lists(self):
        """Test that point collections must be lists."""
        data = dict(VALID_ANALYSIS, misalignedPoints="none")
        with pytest.raises(InvalidAnalysisError):
            AlignmentAnalysis.from_dict(data)

    def test_unknown_strength(self):
        """Test that strengths outside strong/medium/weak are rejected."""
        data = dict(VALID_ANALYSIS, categorizedPoints=[dict(VALID_ANALYSIS["categorizedPoints"][0], strength="ok")])
        with pytest.raises(InvalidAnalysisError, match="Invalid analysis"):
            AlignmentAnalysis.from_dict(data)

    def test_item_missing_field(self):
        """Test that a point missing a field names that field."""
        data = dict(VALID_ANALYSIS, misalignedPoints=[{"point": "x", "reason": "y"}])
        with pytest.raises(InvalidAnalysisError) as exc_info:
            AlignmentAnalysis.from_dict(data)
        assert "suggestion" in exc_info.value.reason

    def test_not_an_object(self):
        """Test that a non-object response is rejected."""
        with pytest.raises(InvalidAnalysisError):
            AlignmentAnalysis.from_dict(["not", "an", "object"])

    def test_empty_lists_allowed(self):
        """Test that empty point lists are valid."""
        analysis = AlignmentAnalysis.from_dict(dict(VALID_ANALYSIS, misalignedPoints=[], categorizedPoints=[]))
        assert analysis.misaligned_points == []
        assert analysis.strength_counts() == {"strong": 0, "medium": 0, "weak": 0}


class TestAnalyzeAlignment:
    """Tests for analyze_alignment and analyze_document."""

    @pytest.mark.parametrize(
        "resume_text, job_description",
        [("", "Data scientist"), ("Resume", ""), ("   ", "Data scientist"), ("Resume", "\n\t")],
    )
    def test_blank_inputs(self, make_provider, resume_text, job_description):
        """Test that blank inputs raise before any provider call."""
        provider = make_provider()
        with pytest.raises(ValueError, match=MISSING_INPUT_MESSAGE):
            analyze_alignment(resume_text, job_description, provider=provider, config=CONFIG)
        assert provider.calls == []

    def test_request_and_result(self, make_provider, full_resume_text, job_description_text):
        """Test prompt contents and the parsed result."""
        provider = make_provider(json.dumps(VALID_ANALYSIS))

        analysis = analyze_alignment(full_resume_text, job_description_text, provider=provider, config=CONFIG)

        assert analysis == AlignmentAnalysis.from_dict(VALID_ANALYSIS)
        (call,) = provider.calls
        assert call["json_mode"] is True
        assert "career coach" in call["system_prompt"]
        assert f"---\n{full_resume_text.strip()}\n---" in call["user_prompt"]
        assert f"---\n{job_description_text.strip()}\n---" in call["user_prompt"]
        assert "categorizedPoints" in call["user_prompt"]

    def test_fenced_response(self, make_provider):
        """Test a JSON response wrapped in a code fence."""
        provider = make_provider("```json\n" + json.dumps(VALID_ANALYSIS) + "\n```")
        analysis = analyze_alignment("Resume", "Job", provider=provider, config=CONFIG)
        assert analysis.overall_summary.startswith("Strong forecasting")

    def test_non_json_response(self, make_provider):
        """Test that a non-JSON response keeps the raw text on the error."""
        provider = make_provider("Sorry, I can't do that.")
        with pytest.raises(InvalidAnalysisError) as exc_info:
            analyze_alignment("Resume", "Job", provider=provider, config=CONFIG)
        assert exc_info.value.raw_response == "Sorry, I can't do that."

    def test_inputs_clipped(self, make_provider):
        """Test that inputs are clipped to the configured sizes."""
        provider = make_provider(json.dumps(VALID_ANALYSIS))
        config = {"llm": {}, "analysis": {"max_resume_chars": 5, "max_job_description_chars": 3}}

        analyze_alignment("ABCDEFGHIJ", "XYZWV", provider=provider, config=config)

        prompt = provider.calls[0]["user_prompt"]
        assert "---\nABCDE\n---" in prompt
        assert "---\nXYZ\n---" in prompt

    def test_provider_by_name(self, make_provider, monkeypatch):
        """Test provider lookup by name, model and configured max_tokens."""
        from resume_aligner.contexts.analysis import alignment_llm

        fake = make_provider(json.dumps(VALID_ANALYSIS))
        requested = {}

        def fake_get_provider(provider_name=None, model=None, max_tokens=None):
            requested.update(provider_name=provider_name, model=model, max_tokens=max_tokens)
            return fake

        monkeypatch.setattr(alignment_llm, "get_provider", fake_get_provider)
        analyze_alignment("Resume", "Job", provider="openai", model="gpt-4o-mini", config=CONFIG)

        assert requested == {"provider_name": "openai", "model": "gpt-4o-mini", "max_tokens": 8192}

    def test_analyze_document_sends_canonical_text(self, make_provider, full_resume_text):
        """Test that documents are sent as reconstructed text."""
        provider = make_provider(json.dumps(VALID_ANALYSIS))
        document = parse_resume(full_resume_text)

        analyze_document(document, "Job", provider=provider, config=CONFIG)

        canonical = reconstruct_resume(document).strip()
        assert f"---\n{canonical}\n---" in provider.calls[0]["user_prompt"]

    def test_build_prompt_trims_inputs(self):
        """Test that prompt inputs are stripped."""
        prompt = build_analysis_prompt("\n\nResume\n\n", "  Job  ")
        assert "---\nResume\n---" in prompt
        assert "---\nJob\n---" in prompt


class TestFormatAnalysisMarkdown:
    """Tests for format_analysis_markdown function."""

    def test_report_sections(self):
        """Test report headings, keywords and strength groups."""
        report = format_analysis_markdown(AlignmentAnalysis.from_dict(VALID_ANALYSIS))

        assert report.startswith("## Executive Summary\n")
        assert "**Missing:** Airflow, dbt" in report
        assert "> Received the 2019 analyst of the year award" in report
        assert report.index("### Strong (1)") < report.index("### Medium (1)") < report.index("### Weak (1)")
        assert "  - *Suggestion:* Quantify the stockout or inventory reduction." in report
        assert report.endswith("\n")

    def test_empty_sections_left_out(self):
        """Test that empty report sections are omitted."""
        analysis = AlignmentAnalysis.from_dict(
            dict(
                VALID_ANALYSIS,
                keywordAnalysis={"matchedKeywords": [], "missingKeywords": ["x"]},
                misalignedPoints=[],
                categorizedPoints=[],
            )
        )
        report = format_analysis_markdown(analysis)
        assert "Alignment Gaps" not in report
        assert "Strengths & Weaknesses" not in report
        assert "**Matched:** (none)" in report
