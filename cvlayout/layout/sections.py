from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..config import SECTION_TITLES
from ..models import ResumeDocument, SectionKind


# Shared by the estimator aggregation and every renderer. Planner gap counts are
# only correct if sections are stacked in exactly this order.
CANONICAL_ORDER: Tuple[SectionKind, ...] = (
    SectionKind.SUMMARY,
    SectionKind.ROLES,
    SectionKind.EXPERIENCE,
    SectionKind.EDUCATION,
    SectionKind.SKILLS,
    SectionKind.PROJECTS,
    SectionKind.ACCOMPLISHMENTS,
    SectionKind.AWARDS,
    SectionKind.CERTIFICATIONS,
    SectionKind.LANGUAGES,
    SectionKind.INTERESTS,
    SectionKind.PUBLICATIONS,
    SectionKind.VOLUNTEER_WORK,
    SectionKind.ADDITIONAL_SECTIONS,
)

FIELD_NAMES: Dict[SectionKind, str] = {
    SectionKind.VOLUNTEER_WORK: "volunteer_work",
    SectionKind.ADDITIONAL_SECTIONS: "additional_sections",
}


@dataclass(frozen=True)
class ActiveSection:
    kind: SectionKind
    data: Any
    title: str
    key: Optional[str] = None


def section_data(document: ResumeDocument, kind: SectionKind) -> Any:
    return getattr(document, FIELD_NAMES.get(kind, kind.value), None)


def is_active(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value)
    return len(value) > 0


def active_sections(document: ResumeDocument) -> List[ActiveSection]:
    """Return the document's non-empty sections in canonical order.

    Additional sections expand to one entry per named section, in document order.
    """
    out: List[ActiveSection] = []
    for kind in CANONICAL_ORDER:
        value = section_data(document, kind)
        if not is_active(value):
            continue
        if kind == SectionKind.ADDITIONAL_SECTIONS:
            for section in value:
                out.append(ActiveSection(kind=kind, data=section, title=section.section_name, key=section.section_name))
            continue
        out.append(ActiveSection(kind=kind, data=value, title=SECTION_TITLES[kind.value]))
    return out
