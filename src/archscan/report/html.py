"""HTML report rendering.

The report is a pure formatting step over the aggregation views: a domain
summary, the full definition listing sorted by namespace, and (when the
usage index was built) the most referenced types.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

import structlog
from jinja2 import Environment, PackageLoader, select_autoescape

from archscan.config.constants import UNKNOWN_DOMAIN
from archscan.index.models import FactStore, UsageIndex
from archscan.index.views import domain_buckets, sorted_by_namespace, usage_frequency

log = structlog.get_logger(__name__)

REPORT_TITLE = "Shopware Architecture Report"
_TEMPLATE_NAME = "report.html.j2"


def domain_slug(domain: str) -> str:
    """CSS-safe class suffix for a domain ("fundamentals@framework" -> "fundamentals--framework")."""
    slug = domain.replace("@", "--")
    return re.sub(r"[^A-Za-z0-9_-]", "-", slug)


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("archscan.report", "templates"),
        autoescape=select_autoescape(["html", "j2"]),
    )
    env.filters["domain_slug"] = domain_slug
    return env


def render_report(
    store: FactStore,
    usages: UsageIndex | None = None,
    *,
    root: str = "",
    title: str = REPORT_TITLE,
    generated_at: datetime | None = None,
) -> str:
    """Render the self-contained HTML report."""
    template = _environment().get_template(_TEMPLATE_NAME)
    generated = generated_at or datetime.now(UTC)
    return template.render(
        title=title,
        root=root,
        generated_at=generated.strftime("%Y-%m-%d %H:%M:%S %Z"),
        unknown=UNKNOWN_DOMAIN,
        buckets=domain_buckets(store),
        records=sorted_by_namespace(store),
        usages=usage_frequency(usages, store) if usages is not None else None,
    )


def write_report(path: Path, html: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    log.info("report_written", path=str(path), bytes=len(html))
    return path
