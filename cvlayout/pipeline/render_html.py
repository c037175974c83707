from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..config import A4_HEIGHT_MM, A4_WIDTH_MM, HTML_TEMPLATE_DIR
from ..layout.planner import css_variables, justify_content
from ..layout.sections import active_sections
from ..models import LayoutReport, ResumeDocument
from ..storage import artifact_path

# autoescape covers & < > " ' in every interpolated value
env = Environment(loader=FileSystemLoader(HTML_TEMPLATE_DIR), autoescape=True)


def render_html(document: ResumeDocument, report: LayoutReport, template: dict) -> str:
    return env.get_template("resume.html").render(
        doc=document,
        details=document.personal_details,
        sections=active_sections(document),
        style=template,
        page_width_mm=A4_WIDTH_MM,
        page_height_mm=A4_HEIGHT_MM,
        content_height_mm=report.page_budget_mm,
        css_vars=css_variables(report.plan),
        justify=justify_content(report.plan),
    )


def write_html(
    slug: str,
    document: ResumeDocument,
    report: LayoutReport,
    template: dict,
    base_dir: Path | None = None,
    include_slug: bool = True,
) -> Path:
    path = artifact_path(slug, "html", base_dir=base_dir, include_slug=include_slug)
    path.write_text(render_html(document, report, template), encoding="utf-8")
    return path
