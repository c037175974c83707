from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import json
import logging


BASE_DIR = Path(__file__).resolve().parents[1]
PACKAGE_DIR = Path(__file__).resolve().parent
OUT_DIR = BASE_DIR / "out"
TEMPLATE_PRESET_PATH = PACKAGE_DIR / "assets" / "templates.json"
HTML_TEMPLATE_DIR = PACKAGE_DIR / "templates"

logger = logging.getLogger(__name__)

# A4 page geometry (mm)
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
DEFAULT_HEADER_HEIGHT_MM = 80
BOTTOM_MARGIN_MM = 10
DEFAULT_PAGE_BUDGET_MM = A4_HEIGHT_MM - DEFAULT_HEADER_HEIGHT_MM - BOTTOM_MARGIN_MM
DEFAULT_TEMPLATE_ID = "template-1"

# Section height heuristics (mm). These decide visible layout, keep them in sync
# with SECTION_HEIGHT_RULES below.
BASE_SECTION_HEIGHT_MM = 8
LINE_HEIGHT_MM = 4
CHARS_PER_LINE = 60
MIN_TEXT_LINES = 3
FALLBACK_LINES = 2

# rule types:
#   text      max(MIN_TEXT_LINES, ceil(len / CHARS_PER_LINE)) lines
#   entries   entry_mm per entry (+ bullet_mm per bullet when set)
#   wrapped   max(1, ceil(count / per_line)) lines
#   flat      a fixed number of lines
SECTION_HEIGHT_RULES: Dict[str, dict] = {
    "summary": {"rule": "text"},
    "roles": {"rule": "entries", "entry_mm": 4},
    "experience": {"rule": "entries", "entry_mm": 12, "bullet_mm": 4},
    "education": {"rule": "entries", "entry_mm": 12},
    "skills": {"rule": "wrapped", "per_line": 8},
    "projects": {"rule": "entries", "entry_mm": 8},
    "accomplishments": {"rule": "entries", "entry_mm": 4},
    "awards": {"rule": "entries", "entry_mm": 6},
    "certifications": {"rule": "entries", "entry_mm": 6},
    "languages": {"rule": "flat", "lines": 1},
    "interests": {"rule": "flat", "lines": 1},
    "publications": {"rule": "entries", "entry_mm": 6},
    "volunteerWork": {"rule": "entries", "entry_mm": 10},
    "additionalSections": {"rule": "text"},
}

SECTION_TITLES: Dict[str, str] = {
    "summary": "Professional Summary",
    "roles": "Professional Roles",
    "experience": "Work Experience",
    "education": "Education",
    "skills": "Skills",
    "projects": "Projects",
    "accomplishments": "Key Accomplishments",
    "awards": "Awards",
    "certifications": "Certifications",
    "languages": "Languages",
    "interests": "Interests",
    "publications": "Publications",
    "volunteerWork": "Volunteer Work",
}

# Spacing ladder (mm)
OVERFLOW_SPACING_MM = 10
MIN_SPACING_MM = 12
TIGHT_SPACING_MM = 12
SPREAD_MIN_SPACING_MM = 15
MODERATE_MAX_SPACING_MM = 25
MAX_SPACING_MM = 40
SPREAD_SLACK_MM = 100
MODERATE_SLACK_MM = 50
LIMITED_SLACK_MM = 20
SPREAD_MAX_SECTIONS = 6


def load_template_presets() -> List[dict]:
    with TEMPLATE_PRESET_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)["templates"]


def get_template(template_id: str | None) -> dict:
    presets = load_template_presets()
    for preset in presets:
        if preset["id"] == template_id:
            return preset
    if template_id is not None:
        logger.warning("Unknown template %r, using %s", template_id, DEFAULT_TEMPLATE_ID)
    return next(preset for preset in presets if preset["id"] == DEFAULT_TEMPLATE_ID)


def page_budget_for(template: dict) -> float:
    header = float(template.get("header_height_mm", DEFAULT_HEADER_HEIGHT_MM))
    bottom = float(template.get("bottom_margin_mm", BOTTOM_MARGIN_MM))
    return A4_HEIGHT_MM - header - bottom


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
