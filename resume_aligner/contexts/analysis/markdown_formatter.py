"""
Markdown Utilities

Formats an AlignmentAnalysis as a markdown report.
"""

from resume_aligner.contexts.analysis.analysis_data_structure import AlignmentAnalysis, Strength


def format_analysis_markdown(analysis: AlignmentAnalysis) -> str:
    """
    Format an analysis as markdown.

    Sections: Executive Summary, Keyword Analysis, Alignment Gaps &
    Suggestions, and Strengths & Weaknesses Breakdown (grouped strong to
    weak). Empty sections are left out.

    Args:
        analysis: Validated analysis

    Returns:
        Markdown report
    """
    parts = ["## Executive Summary\n", f"{analysis.overall_summary}\n"]

    keywords = analysis.keyword_analysis
    if keywords.matched_keywords or keywords.missing_keywords:
        parts.append("## Keyword Analysis\n")
        parts.append(f"**Matched:** {', '.join(keywords.matched_keywords) or '(none)'}\n")
        parts.append(f"**Missing:** {', '.join(keywords.missing_keywords) or '(none)'}\n")

    if analysis.misaligned_points:
        parts.append("## Alignment Gaps & Suggestions\n")
        for item in analysis.misaligned_points:
            parts.append(f"> {item.point}\n")
            parts.append(f"**Reason for Misalignment:** {item.reason}\n")
            parts.append(f"**Suggestion:** {item.suggestion}\n")

    if analysis.categorized_points:
        parts.append("## Strengths & Weaknesses Breakdown\n")
        for strength in Strength.all():
            points = analysis.points_by_strength(strength)
            if not points:
                continue
            parts.append(f"### {strength.capitalize()} ({len(points)})\n")
            for point in points:
                parts.append(f"- {point.point}")
                parts.append(f"  - *Justification:* {point.justification}")
                if point.suggestion:
                    parts.append(f"  - *Suggestion:* {point.suggestion}")
            parts.append("")

    return "\n".join(parts).strip() + "\n"
