from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError
from slugify import slugify

from ..models import ResumeDocument


# camelCase keys emitted by the document-assembly layer
KEY_ALIASES: Dict[str, str] = {
    "personalDetails": "personal_details",
    "volunteerWork": "volunteer_work",
    "additionalSections": "additional_sections",
    "sectionName": "section_name",
}


def load_payload(json_path: Path) -> dict:
    if not json_path.exists():
        raise FileNotFoundError(f"Resume not found: {json_path}")
    try:
        payload = json.loads(json_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {json_path.name}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{json_path.name} must contain a JSON object")
    return payload


def normalize_payload(value: Any) -> Any:
    """Map camelCase keys to field names and treat null or blank strings as absent."""
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            item = normalize_payload(item)
            if item is None:
                continue
            out[KEY_ALIASES.get(key, key)] = item
        return out
    if isinstance(value, list):
        return [item for item in (normalize_payload(item) for item in value) if item is not None]
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def parse_document(payload: dict) -> ResumeDocument:
    try:
        return ResumeDocument.model_validate(normalize_payload(payload))
    except ValidationError as exc:
        raise ValueError(f"Resume does not match schema: {exc.error_count()} error(s)\n{exc}") from exc


def load_document(json_path: Path) -> ResumeDocument:
    return parse_document(load_payload(json_path))


def discover_documents(path: Path) -> List[Path]:
    if path.is_dir():
        return sorted(p for p in path.glob("*.json") if p.is_file())
    if not path.exists():
        raise FileNotFoundError(f"Resume not found: {path}")
    return [path]


def slug_from_title(title: str) -> str:
    slug = slugify(title)
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5(title.encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from title")
    return slug


def slug_for_document(document: ResumeDocument, fallback: str) -> str:
    name = document.personal_details.name
    return slug_from_title(name or fallback)
