"""
Report Generator Service - Render audit reports as standalone HTML.

Uses Jinja2 templates shipped in the package's ``templates`` directory.
"""

import os
from jinja2 import Environment, FileSystemLoader, select_autoescape

from agent_auditor.logger import logger
from agent_auditor.schemas.audit_result import AuditResult
from agent_auditor.services.scoring.models import Status

# Section order in the report
STATUS_SECTIONS = [
    (Status.FAIL, "Failed"),
    (Status.WARN, "Warnings"),
    (Status.PASS, "Passed"),
    (Status.NOT_APPLICABLE, "Not applicable"),
]

GRADE_COLORS = {
    "A": "#22c55e",
    "B": "#84cc16",
    "C": "#eab308",
    "D": "#f97316",
    "F": "#ef4444",
}


class ReportGenerator:
    """Generate HTML reports from audit results."""

    def __init__(self, template_dir: str = None):
        self.template_dir = template_dir or os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html"]),
        )

    def generate(self, result: AuditResult) -> str:
        """Render the report for one audit.

        Args:
            result: Stored audit result

        Returns:
            str: HTML document
        """
        sections = []
        for status, title in STATUS_SECTIONS:
            checks = [c for c in result.checks if c.status == status]
            if checks:
                sections.append({"title": title, "status": status.value, "checks": checks})

        template = self.env.get_template("audit_report.html")
        html = template.render(
            audit=result,
            audit_type=result.type.value.upper(),
            date=result.timestamp.strftime("%B %d, %Y %H:%M UTC"),
            grade_color=GRADE_COLORS.get(result.grade, "#6b7280"),
            sections=sections,
        )

        logger.info(f"Generated HTML report for audit {result.id} ({len(html)} chars)")
        return html
