from __future__ import annotations

import copy

import pytest

from cvlayout.pipeline.ingest import parse_document


FULL_PAYLOAD = {
    "personalDetails": {
        "name": "Ada Lovelace",
        "title": "Analyst",
        "email": "ada@example.com",
        "phone": "+44 20 0000 0000",
        "location": "London",
    },
    "summary": "Mathematician and writer known for work on the Analytical Engine and the first published algorithm.",
    "roles": ["Analyst", "Programmer"],
    "experience": [
        {
            "role": "Analyst",
            "company": "Analytical Engines Ltd",
            "years": "1842 - 1843",
            "bullets": ["Translated and annotated the engine memoir", "Published the first algorithm"],
        }
    ],
    "education": [{"degree": "Private tuition", "institution": "Home", "years": "1820 - 1835"}],
    "skills": ["Mathematics", "Algorithms", "Writing"],
    "projects": [{"title": "Note G", "description": "Bernoulli numbers on the Analytical Engine"}],
    "accomplishments": ["First published program"],
    "awards": [{"title": "Honorary mention", "issuer": "Royal Society", "year": "1843"}],
    "certifications": [{"name": "Symbolic logic", "year": "1840"}],
    "languages": ["English", "French"],
    "interests": ["Poetry"],
    "publications": [{"title": "Sketch of the Analytical Engine", "journal": "Scientific Memoirs", "year": "1843"}],
    "volunteerWork": [{"organization": "Mechanics Institute", "role": "Tutor"}],
    "additionalSections": [
        {"sectionName": "Hobbies", "content": "Horse riding"},
        {"sectionName": "References", "content": "Available on request"},
    ],
}

SMALL_PAYLOAD = {
    "personalDetails": {"name": "Grace Hopper", "email": "grace@example.com"},
    "summary": "x" * 200,
    "skills": ["COBOL", "Compilers", "Leadership", "Debugging", "Teaching"],
}


@pytest.fixture
def full_payload() -> dict:
    return copy.deepcopy(FULL_PAYLOAD)


@pytest.fixture
def small_payload() -> dict:
    return copy.deepcopy(SMALL_PAYLOAD)


@pytest.fixture
def full_document(full_payload):
    return parse_document(full_payload)


@pytest.fixture
def small_document(small_payload):
    return parse_document(small_payload)
