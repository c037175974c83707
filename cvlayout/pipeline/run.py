from __future__ import annotations

from pathlib import Path
import json
import logging
import shutil
from typing import Iterable, List

from .. import config
from ..layout.planner import layout_document
from ..models import RenderStatus, ResumeDocument
from ..storage import artifact_path
from .ingest import load_document, slug_for_document, slug_from_title
from .qa import check_drawn_layout, check_layout
from .render_html import write_html
from .render_pdf import content_bottom_mm, place_sections, write_pdf
from .render_preview import render_preview


logger = logging.getLogger(__name__)


def _write_error(slug: str, message: str) -> None:
    error_path = artifact_path(slug, "error", base_dir=config.OUT_DIR)
    error_path.write_text(message, encoding="utf-8")


def _prepare_temp_dir(slug: str) -> Path:
    temp_dir = config.OUT_DIR / f"{slug}.tmp"
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def _finalize_artifacts(temp_dir: Path, final_dir: Path) -> None:
    if final_dir.exists():
        shutil.rmtree(final_dir)
    temp_dir.replace(final_dir)


def render_document(
    document: ResumeDocument,
    slug: str,
    template_id: str | None = None,
) -> tuple[RenderStatus, List[str]]:
    """Render one document into OUT_DIR/<slug>; returns its status and QA warnings."""
    template = config.get_template(template_id)
    report = layout_document(document, config.page_budget_for(template))
    drawn_bottom = content_bottom_mm(place_sections(document, report, template))
    drawn_warnings = check_drawn_layout(drawn_bottom, report)
    warnings = check_layout(report) + drawn_warnings

    temp_dir = _prepare_temp_dir(slug)
    try:
        layout_path = artifact_path(slug, "layout", base_dir=temp_dir, include_slug=False)
        payload = {
            "slug": slug,
            "template": template["id"],
            **report.to_dict(),
            "drawnContentMm": drawn_bottom,
            "warnings": warnings,
        }
        layout_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

        write_html(slug, document, report, template, base_dir=temp_dir, include_slug=False)
        pdf_path = write_pdf(slug, document, report, template, base_dir=temp_dir, include_slug=False)
        render_preview(slug, pdf_path, base_dir=temp_dir, include_slug=False)
    except Exception:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise

    _finalize_artifacts(temp_dir, config.OUT_DIR / slug)
    status = RenderStatus.TIGHT if report.tight or drawn_warnings else RenderStatus.READY
    return status, warnings


def _claim_slug(slug: str, stem: str, seen: set[str]) -> str:
    """Reserve a slug for this batch, suffixing the file stem on collisions."""
    candidate = slug
    if candidate in seen:
        candidate = f"{slug}-{slug_from_title(stem)}"
    index = 2
    while candidate in seen:
        candidate = f"{slug}-{index}"
        index += 1
    seen.add(candidate)
    return candidate


def run_pipeline(paths: Iterable[Path], template_id: str | None = None) -> dict[str, list[str]]:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    results: dict[str, list[str]] = {status.value: [] for status in RenderStatus}
    seen: set[str] = set()
    for path in paths:
        slug = slug_from_title(path.stem)
        claimed = False
        try:
            document = load_document(path)
            slug = _claim_slug(slug_for_document(document, path.stem), path.stem, seen)
            claimed = True
            status, warnings = render_document(document, slug, template_id)
        except Exception as exc:
            logger.exception("Render error for %s", path)
            if not claimed:
                slug = _claim_slug(slug, path.stem, seen)
            _write_error(slug, str(exc) or exc.__class__.__name__)
            results[RenderStatus.FAILED.value].append(slug)
            continue

        for warning in warnings:
            logger.warning("%s: %s", slug, warning)
        results[status.value].append(slug)
    return results
