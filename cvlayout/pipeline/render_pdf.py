from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..config import BASE_SECTION_HEIGHT_MM, LINE_HEIGHT_MM
from ..layout.sections import ActiveSection, active_sections
from ..models import LayoutReport, ResumeDocument, SectionKind
from ..storage import artifact_path


SIDE_MARGIN_MM = 10
BODY_SIZE = 8.5
TITLE_SIZE = 11
# first body baseline, below the section title and its rule
BODY_TOP_MM = BASE_SECTION_HEIGHT_MM + 3


def _hex(value: str, default=colors.black) -> colors.Color:
    if not value:
        return default
    try:
        return colors.HexColor("#" + str(value).lstrip("#"))
    except ValueError:
        return default


def _s(style: dict, key: str, default):
    return style.get(key, default)


def _bold(font_name: str) -> str:
    if font_name == "Times-Roman":
        return "Times-Bold"
    return f"{font_name}-Bold"


def section_offsets(report: LayoutReport) -> List[float]:
    """Top offset (mm) of every section below the top of the content area.

    Mirrors the HTML container: each gap is the planned spacing, and with slack
    distribution any remaining free space is shared equally between the gaps.
    """
    estimates = report.estimates
    gap = float(report.plan.inter_section_spacing_mm)
    if report.plan.distribute_slack and len(estimates) > 1:
        free = report.page_budget_mm - report.total_content_mm - gap * (len(estimates) - 1)
        gap += max(0.0, free) / (len(estimates) - 1)
    offsets: List[float] = []
    cursor = 0.0
    for estimate in estimates:
        offsets.append(cursor)
        cursor += estimate.height_mm + gap
    return offsets


def _fit_font(canv: canvas.Canvas, text: str, font_name: str, base_size: float, max_width: float) -> float:
    """Shrink the font until the text fits max_width, down to 7pt."""
    size = float(base_size)
    while size > 7.0:
        if canv.stringWidth(text, font_name, size) <= max_width:
            return size
        size -= 0.5
    return 7.0


def _wrap_words(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    words = (text or "").split()
    if not words:
        return [""]

    lines: List[str] = []
    cur: List[str] = []

    for w in words:
        test = " ".join(cur + [w])
        if stringWidth(test, font_name, font_size) <= max_width:
            cur.append(w)
            continue
        if cur:
            lines.append(" ".join(cur))
            cur = [w]
        else:
            # single word wider than the line
            lines.append(w)

    if cur:
        lines.append(" ".join(cur))
    return lines


def _joined(*parts: str | None, sep: str = " - ") -> str:
    return sep.join(part for part in parts if part)


def _section_lines(section: ActiveSection) -> List[Tuple[bool, str]]:
    """Flatten a section into (bold, text) lines before wrapping."""
    kind = section.kind
    data = section.data
    if kind == SectionKind.SUMMARY:
        return [(False, data)]
    if kind in (SectionKind.ROLES, SectionKind.ACCOMPLISHMENTS):
        return [(False, f"- {item}") for item in data]
    if kind in (SectionKind.SKILLS, SectionKind.LANGUAGES, SectionKind.INTERESTS):
        return [(False, "  |  ".join(data))]
    lines: List[Tuple[bool, str]] = []
    if kind == SectionKind.EXPERIENCE:
        for entry in data:
            lines.append((True, _joined(entry.role, entry.company, entry.years, sep=" | ")))
            lines.extend((False, f"- {bullet}") for bullet in entry.bullets if bullet)
    elif kind == SectionKind.EDUCATION:
        for entry in data:
            lines.append((True, entry.degree))
            lines.append((False, _joined(entry.institution, entry.years, sep=" | ")))
    elif kind == SectionKind.PROJECTS:
        for entry in data:
            lines.append((True, entry.title))
            lines.append((False, entry.description))
    elif kind == SectionKind.AWARDS:
        lines.extend((False, _joined(entry.title, entry.issuer, entry.year)) for entry in data)
    elif kind == SectionKind.CERTIFICATIONS:
        lines.extend((False, _joined(entry.name, entry.issuer, entry.year)) for entry in data)
    elif kind == SectionKind.PUBLICATIONS:
        lines.extend((False, _joined(entry.title, entry.journal, entry.year)) for entry in data)
    elif kind == SectionKind.VOLUNTEER_WORK:
        for entry in data:
            lines.append((True, _joined(entry.role or "Volunteer", entry.organization)))
            lines.append((False, _joined(entry.duration, entry.description, sep=" | ")))
    else:
        lines.append((False, data.content))
    return [(bold, text) for bold, text in lines if text]


def _draw_header(canv: canvas.Canvas, document: ResumeDocument, style: dict, pw: float, ph: float) -> None:
    font = str(_s(style, "font_name", "Helvetica"))
    primary = _hex(_s(style, "primary_color", "#7C3AED"))
    secondary = _hex(_s(style, "secondary_color", "#555555"))
    header_h = float(_s(style, "header_height_mm", 80)) * mm
    margin = SIDE_MARGIN_MM * mm
    width = pw - 2 * margin
    details = document.personal_details
    centred = _s(style, "header_align", "center") == "center"

    def draw(text: str, y: float) -> None:
        if centred:
            canv.drawCentredString(pw / 2, y, text)
        else:
            canv.drawString(margin, y, text)

    y = ph - 24 * mm
    name = details.name or ""
    canv.setFillColor(primary)
    canv.setFont(_bold(font), _fit_font(canv, name, _bold(font), 26, width))
    draw(name, y)

    if details.title:
        y -= 10 * mm
        canv.setFillColor(secondary)
        canv.setFont(font, _fit_font(canv, details.title, font, 13, width))
        draw(details.title, y)

    contact = " | ".join(details.contact_items())
    if contact:
        y -= 8 * mm
        canv.setFillColor(secondary)
        canv.setFont(font, _fit_font(canv, contact, font, 10, width))
        draw(contact, y)

    canv.setStrokeColor(primary)
    canv.setLineWidth(2)
    canv.line(margin, ph - header_h + 4 * mm, pw - margin, ph - header_h + 4 * mm)


def _draw_section_title(canv: canvas.Canvas, x: float, y: float, width: float, text: str, style: dict) -> None:
    font = _bold(str(_s(style, "font_name", "Helvetica")))
    canv.setFont(font, TITLE_SIZE)
    canv.setFillColor(_hex(_s(style, "primary_color", "#7C3AED")))
    canv.drawString(x, y, text)
    canv.setStrokeColor(_hex(_s(style, "rule_color", "#E5E7EB")))
    canv.setLineWidth(1)
    canv.line(x, y - 1.5 * mm, x + width, y - 1.5 * mm)


@dataclass(frozen=True)
class PlacedSection:
    section: ActiveSection
    top_mm: float                             # below the top of the content area
    lines: Tuple[Tuple[str, str], ...]        # (font face, text) after wrapping

    @property
    def height_mm(self) -> float:
        return BODY_TOP_MM + len(self.lines) * LINE_HEIGHT_MM

    @property
    def bottom_mm(self) -> float:
        return self.top_mm + self.height_mm


def _wrapped_lines(section: ActiveSection, font: str, width: float) -> Tuple[Tuple[str, str], ...]:
    out: List[Tuple[str, str]] = []
    for bold, text in _section_lines(section):
        face = _bold(font) if bold else font
        out.extend((face, line) for line in _wrap_words(text, face, BODY_SIZE, width))
    return tuple(out)


def place_sections(document: ResumeDocument, report: LayoutReport, template: dict) -> List[PlacedSection]:
    """Position every section as it will be drawn.

    A section starts at its planned offset unless the text above it wrapped to
    more lines than estimated; then it starts one planned gap below that text.
    """
    font = str(_s(template, "font_name", "Helvetica"))
    width = A4[0] - 2 * SIDE_MARGIN_MM * mm
    gap = report.plan.inter_section_spacing_mm
    placed: List[PlacedSection] = []
    for section, planned in zip(active_sections(document), section_offsets(report)):
        top = planned
        if placed:
            top = max(planned, placed[-1].bottom_mm + gap)
        placed.append(PlacedSection(section=section, top_mm=top, lines=_wrapped_lines(section, font, width)))
    return placed


def content_bottom_mm(placed: Sequence[PlacedSection]) -> float:
    return placed[-1].bottom_mm if placed else 0.0


def _draw_section(canv: canvas.Canvas, placed: PlacedSection, content_top: float, width: float, style: dict) -> None:
    x = SIDE_MARGIN_MM * mm
    top = content_top - placed.top_mm * mm
    _draw_section_title(canv, x, top - 5 * mm, width, placed.section.title, style)

    y = top - BODY_TOP_MM * mm
    canv.setFillColor(colors.HexColor("#333333"))
    for face, line in placed.lines:
        canv.setFont(face, BODY_SIZE)
        canv.drawString(x, y, line)
        y -= LINE_HEIGHT_MM * mm


def render_pdf(
    document: ResumeDocument,
    report: LayoutReport,
    template: dict,
    output_path: Path,
) -> List[PlacedSection]:
    canv = canvas.Canvas(str(output_path), pagesize=A4)
    pw, ph = A4
    width = pw - 2 * SIDE_MARGIN_MM * mm
    content_top = ph - float(_s(template, "header_height_mm", 80)) * mm

    canv.setTitle(document.personal_details.name or "Resume")
    _draw_header(canv, document, template, pw, ph)
    placed = place_sections(document, report, template)
    for section in placed:
        _draw_section(canv, section, content_top, width, template)

    canv.showPage()
    canv.save()
    return placed


def write_pdf(
    slug: str,
    document: ResumeDocument,
    report: LayoutReport,
    template: dict,
    base_dir: Path | None = None,
    include_slug: bool = True,
) -> Path:
    a4_path = artifact_path(slug, "pdf_a4", base_dir=base_dir, include_slug=include_slug)
    render_pdf(document, report, template, a4_path)
    return a4_path
