from __future__ import annotations

import logging
import math
from typing import Dict, Sequence

from ..config import (
    DEFAULT_PAGE_BUDGET_MM,
    LIMITED_SLACK_MM,
    MAX_SPACING_MM,
    MIN_SPACING_MM,
    MODERATE_MAX_SPACING_MM,
    MODERATE_SLACK_MM,
    OVERFLOW_SPACING_MM,
    SPREAD_MAX_SECTIONS,
    SPREAD_MIN_SPACING_MM,
    SPREAD_SLACK_MM,
    TIGHT_SPACING_MM,
)
from ..models import LayoutReport, ResumeDocument, SectionHeightEstimate, SpacingPlan
from .estimate import estimate_sections

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_mm(value: float) -> int:
    # half-up, so 12.5mm becomes 13mm rather than banker's 12mm
    return int(math.floor(value + 0.5))


def plan_spacing(
    ordered_estimates: Sequence[SectionHeightEstimate],
    page_budget_mm: float,
    active_section_count: int,
) -> SpacingPlan:
    """Pick the gap between sections and whether to spread slack down the page.

    Rules are evaluated in order and the first match wins. Negative slack packs
    at the 10mm floor; the page will overflow and nothing here prevents it.
    """
    total = sum(estimate.height_mm for estimate in ordered_estimates)
    slack = page_budget_mm - total
    gaps = max(1, active_section_count - 1)
    per_gap = slack / gaps

    distribute = False
    if slack < 0:
        spacing = OVERFLOW_SPACING_MM
    elif slack > SPREAD_SLACK_MM and active_section_count < SPREAD_MAX_SECTIONS:
        distribute = True
        spacing = _clamp(per_gap, SPREAD_MIN_SPACING_MM, MAX_SPACING_MM)
    elif slack > MODERATE_SLACK_MM:
        spacing = _clamp(per_gap, SPREAD_MIN_SPACING_MM, MODERATE_MAX_SPACING_MM)
    elif slack > LIMITED_SLACK_MM:
        spacing = max(MIN_SPACING_MM, per_gap)
    else:
        spacing = TIGHT_SPACING_MM

    spacing = min(spacing, MAX_SPACING_MM)
    logger.debug(
        "Spacing plan: total=%.1fmm slack=%.1fmm gaps=%d spacing=%.2fmm distribute=%s",
        total,
        slack,
        gaps,
        spacing,
        distribute,
    )
    return SpacingPlan(inter_section_spacing_mm=_round_mm(spacing), distribute_slack=distribute)


def layout_document(document: ResumeDocument, page_budget_mm: float = DEFAULT_PAGE_BUDGET_MM) -> LayoutReport:
    estimates = estimate_sections(document)
    plan = plan_spacing(estimates, page_budget_mm, len(estimates))
    return LayoutReport(
        plan=plan,
        page_budget_mm=float(page_budget_mm),
        total_content_mm=float(sum(estimate.height_mm for estimate in estimates)),
        estimates=tuple(estimates),
    )


def justify_content(plan: SpacingPlan) -> str:
    return "space-between" if plan.distribute_slack else "flex-start"


def css_variables(plan: SpacingPlan) -> Dict[str, str]:
    return {"--section-spacing": f"{plan.inter_section_spacing_mm}mm"}
