from __future__ import annotations

import math
from typing import List, Optional, Union

from ..config import (
    BASE_SECTION_HEIGHT_MM,
    CHARS_PER_LINE,
    FALLBACK_LINES,
    LINE_HEIGHT_MM,
    MIN_TEXT_LINES,
    SECTION_HEIGHT_RULES,
)
from ..models import ResumeDocument, SectionHeightEstimate, SectionKind
from .sections import active_sections, section_data


def _text_lines(text: Optional[str]) -> int:
    return max(MIN_TEXT_LINES, math.ceil(len(text or "") / CHARS_PER_LINE))


def _text_source(kind: SectionKind, document: ResumeDocument, section_key: Optional[str]) -> Optional[str]:
    if kind != SectionKind.ADDITIONAL_SECTIONS:
        return section_data(document, kind)
    for section in document.additional_sections or []:
        if section.section_name == section_key:
            return section.content
    return None


def _variable_height(kind: SectionKind, rule: dict, document: ResumeDocument, section_key: Optional[str]) -> float:
    name = rule["rule"]
    if name == "text":
        text = _text_source(kind, document, section_key)
        if text is None and kind == SectionKind.ADDITIONAL_SECTIONS:
            # unknown section name: title only
            return 0
        return _text_lines(text) * LINE_HEIGHT_MM

    entries = section_data(document, kind) or []
    if name == "entries":
        height = len(entries) * rule["entry_mm"]
        bullet_mm = rule.get("bullet_mm")
        if bullet_mm:
            height += sum(len(getattr(entry, "bullets", None) or []) for entry in entries) * bullet_mm
        return height
    if name == "wrapped":
        return max(1, math.ceil(len(entries) / rule["per_line"])) * LINE_HEIGHT_MM
    if name == "flat":
        return rule["lines"] * LINE_HEIGHT_MM
    return FALLBACK_LINES * LINE_HEIGHT_MM


def estimate(
    kind: Union[SectionKind, str],
    document: ResumeDocument,
    section_key: Optional[str] = None,
) -> float:
    """Estimate the rendered height (mm) of one section.

    Character counts stand in for font metrics: 60 characters per wrapped line at
    4mm per line. Unknown kinds get the base height plus two generic lines.
    """
    try:
        kind = SectionKind(kind)
    except ValueError:
        return float(BASE_SECTION_HEIGHT_MM + FALLBACK_LINES * LINE_HEIGHT_MM)
    rule = SECTION_HEIGHT_RULES.get(kind.value)
    if rule is None:
        return float(BASE_SECTION_HEIGHT_MM + FALLBACK_LINES * LINE_HEIGHT_MM)
    return float(BASE_SECTION_HEIGHT_MM + _variable_height(kind, rule, document, section_key))


def estimate_sections(document: ResumeDocument) -> List[SectionHeightEstimate]:
    return [
        SectionHeightEstimate(kind=section.kind, height_mm=estimate(section.kind, document, section.key), key=section.key)
        for section in active_sections(document)
    ]
