from __future__ import annotations

import logging
from typing import List

from ..models import LayoutReport

logger = logging.getLogger(__name__)


def check_layout(report: LayoutReport) -> List[str]:
    """Return human-readable warnings for a layout; an empty list means it fits."""
    warnings: List[str] = []
    if not report.estimates:
        warnings.append("Resume has no content sections")
        return warnings
    if report.tight:
        warnings.append(
            f"Content exceeds the page budget by {report.overflow_mm:.0f}mm "
            f"({report.total_content_mm:.0f}mm estimated, {report.page_budget_mm:.0f}mm available); "
            "the rendered page may be cut off"
        )
        logger.info("Tight layout: %.1fmm over budget", report.overflow_mm)
    for estimate in report.estimates:
        if estimate.height_mm > report.page_budget_mm:
            label = estimate.key or estimate.kind.value
            warnings.append(f"Section '{label}' alone is taller than the page ({estimate.height_mm:.0f}mm)")
    return warnings


def check_drawn_layout(drawn_bottom_mm: float, report: LayoutReport) -> List[str]:
    """Warn when wrapped PDF text pushes the last section past the page budget."""
    if report.tight or drawn_bottom_mm <= report.page_budget_mm:
        return []
    over = drawn_bottom_mm - report.page_budget_mm
    logger.info("Wrapped text runs %.1fmm past the budget", over)
    return [
        f"Wrapped text runs {over:.0f}mm past the page budget "
        f"({drawn_bottom_mm:.0f}mm drawn, {report.page_budget_mm:.0f}mm available); "
        "the PDF page may be cut off"
    ]
