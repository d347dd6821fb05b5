"""Static HTML report."""

from archscan.report.html import REPORT_TITLE, domain_slug, render_report, write_report

__all__ = [
    "REPORT_TITLE",
    "domain_slug",
    "render_report",
    "write_report",
]
