"""
Default values for new resumes.

Provides the section menu offered when adding sections in the editor and a
template resume used when no input text is given.
"""

from typing import List, Tuple

from resume_aligner.contexts.editing.resume_data_structure import SectionKind

# Ordered (title, kind) pairs offered by the "add section" menu
DEFAULT_SECTION_TITLES: List[Tuple[str, str]] = [
    ("EDUCATION", SectionKind.STANDARD),
    ("PROFESSIONAL EXPERIENCE", SectionKind.STANDARD),
    ("PROJECTS", SectionKind.STANDARD),
    ("SKILLS", SectionKind.SKILLS),
    ("EXTRACURRICULAR INVOLVEMENT", SectionKind.STANDARD),
]

# Template resume in the tab-delimited text format (tabs are significant)
DEFAULT_RESUME = (
    "JANE DOE\t<b><a href=\"tel:+1-555-010-2030\">+1-555-010-2030</a> | "
    "<a href=\"mailto:jane.doe@example.com\">jane.doe@example.com</a> | "
    "<a href=\"https://linkedin.com/in/janedoe\">linkedin.com/in/janedoe</a></b>\n"
    "\n"
    "EDUCATION\n"
    "<b>MSc Operations Research | University of Edinburgh | Distinction (top 5% of 120)</b>\t<b>Sep 19 – Sep 20</b>\n"
    "<b>BSc Economics | University of Leeds | First-class honours</b>\t<b>Sep 15 – Jun 18</b>\n"
    "o\tDissertation on regional supply chain resilience\n"
    "\n"
    "PROFESSIONAL EXPERIENCE\n"
    "Operations Manager | Northwind Materials Ltd\tMar 2021 – Present\n"
    "• <b>FP&A:</b> Owned the P&L and delivered financial analyses to the leadership team, informing budget allocation\n"
    "o Directed the annual <b>operating plan & rolling forecasts</b> across revenue, margins and cost centers\n"
    "o Automated invoicing through an <b>ERP API integration</b>, cutting month-end close by 3 days\n"
    "• <b>Operational Excellence:</b> Reduced order turnaround from 12 days to <b>~2 days</b> by removing bottlenecks\n"
    "o Increased line utilization by <b>7%</b> by applying <b>Lean principles</b>\n"
    "o Reduced stockouts by <b>30%</b> with <b>aggregate demand plans</b> and pull-based replenishment\n"
    "Business Analyst | Contoso Consulting\tJul 2018 – Feb 2021\n"
    "• Built <b>Python ETL workflows</b> reaching 100% inventory accuracy across 400+ SKUs\n"
    "• Delivered a <b>pricing model</b> adopted by three regional sales teams\n"
    "\n"
    "SKILLS\n"
    "Technical Skills: Python, SQL, Excel, Power BI\n"
    "Languages: English, Spanish\n"
)
