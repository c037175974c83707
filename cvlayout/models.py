from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from sqlmodel import Field, SQLModel


class SectionKind(str, Enum):
    SUMMARY = "summary"
    ROLES = "roles"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    ACCOMPLISHMENTS = "accomplishments"
    AWARDS = "awards"
    CERTIFICATIONS = "certifications"
    LANGUAGES = "languages"
    INTERESTS = "interests"
    PUBLICATIONS = "publications"
    VOLUNTEER_WORK = "volunteerWork"
    ADDITIONAL_SECTIONS = "additionalSections"


class RenderStatus(str, Enum):
    READY = "READY"
    TIGHT = "TIGHT"
    FAILED = "FAILED"


class PersonalDetails(SQLModel):
    name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None

    def contact_items(self) -> List[str]:
        items = [self.email, self.phone, self.location, self.linkedin, self.github, self.portfolio]
        return [item for item in items if item]


class ExperienceEntry(SQLModel):
    role: str = ""
    company: str = ""
    years: str = ""
    bullets: List[str] = Field(default_factory=list)


class EducationEntry(SQLModel):
    degree: str = ""
    institution: str = ""
    years: str = ""


class ProjectEntry(SQLModel):
    title: str = ""
    description: str = ""


class AwardEntry(SQLModel):
    title: str = ""
    issuer: Optional[str] = None
    year: Optional[str] = None


class CertificationEntry(SQLModel):
    name: str = ""
    issuer: Optional[str] = None
    year: Optional[str] = None


class PublicationEntry(SQLModel):
    title: str = ""
    journal: Optional[str] = None
    year: Optional[str] = None


class VolunteerEntry(SQLModel):
    organization: str = ""
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None


class AdditionalSection(SQLModel):
    section_name: str = ""
    content: str = ""


class ResumeDocument(SQLModel):
    personal_details: PersonalDetails = Field(default_factory=PersonalDetails)
    summary: Optional[str] = None
    roles: Optional[List[str]] = None
    experience: Optional[List[ExperienceEntry]] = None
    education: Optional[List[EducationEntry]] = None
    skills: Optional[List[str]] = None
    projects: Optional[List[ProjectEntry]] = None
    accomplishments: Optional[List[str]] = None
    awards: Optional[List[AwardEntry]] = None
    certifications: Optional[List[CertificationEntry]] = None
    languages: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    publications: Optional[List[PublicationEntry]] = None
    volunteer_work: Optional[List[VolunteerEntry]] = None
    additional_sections: Optional[List[AdditionalSection]] = None


@dataclass(frozen=True)
class SectionHeightEstimate:
    kind: SectionKind
    height_mm: float
    key: Optional[str] = None                # section name for additional sections

    def to_dict(self) -> dict:
        out = {"kind": self.kind.value, "heightMm": self.height_mm}
        if self.key is not None:
            out["key"] = self.key
        return out


@dataclass(frozen=True)
class SpacingPlan:
    inter_section_spacing_mm: int
    distribute_slack: bool

    def to_dict(self) -> dict:
        return {
            "interSectionSpacingMm": self.inter_section_spacing_mm,
            "distributeSlack": self.distribute_slack,
        }


@dataclass(frozen=True)
class LayoutReport:
    """Everything one render needs to know about fitting a document on its page."""

    plan: SpacingPlan
    page_budget_mm: float
    total_content_mm: float
    estimates: Tuple[SectionHeightEstimate, ...] = field(default_factory=tuple)

    @property
    def slack_mm(self) -> float:
        return self.page_budget_mm - self.total_content_mm

    @property
    def tight(self) -> bool:
        """True when the estimated content does not fit the page budget."""
        return self.slack_mm < 0

    @property
    def overflow_mm(self) -> float:
        return max(0.0, -self.slack_mm)

    def to_dict(self) -> dict:
        return {
            "plan": self.plan.to_dict(),
            "pageBudgetMm": self.page_budget_mm,
            "totalContentMm": self.total_content_mm,
            "slackMm": self.slack_mm,
            "tight": self.tight,
            "sections": [estimate.to_dict() for estimate in self.estimates],
        }
