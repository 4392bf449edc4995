"""Pydantic models for job_analysis.yaml (payload under ``job_analysis``)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, RootModel, model_validator

from cv_tailor.models.common import NonEmptyStr, Url

WEIGHT_TOLERANCE = 0.001

PrimaryArea = Literal[
    "junior_engineer",
    "engineer",
    "senior_engineer",
    "staff_engineer",
    "principal_engineer",
    "tech_lead",
    "engineering_manager",
]

Specialty = Literal[
    "ai", "ml", "data",
    "react", "typescript", "node", "python",
    "aws", "testing", "architecture", "devops",
    "frontend", "backend", "mobile", "security",
]


class JobFocusItem(BaseModel):
    primary_area: PrimaryArea
    specialties: list[Specialty] = Field(default_factory=list)
    weight: float = Field(ge=0, le=1)


class JobFocus(RootModel[list[JobFocusItem]]):
    """Weighted focus areas. Weights must add up to 1.0 (+/- 0.001)."""

    root: list[JobFocusItem] = Field(min_length=1)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "JobFocus":
        total = sum(item.weight for item in self.root)
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError("Job focus weights must sum to 1.0")
        return self

    def top(self) -> JobFocusItem:
        """Highest-weighted item (first one wins on ties)."""
        return max(self.root, key=lambda item: item.weight)

    def describe(self) -> str:
        item = self.top()
        return f"{item.primary_area} + [{', '.join(item.specialties)}]"


class SkillWithPriority(BaseModel):
    skill: NonEmptyStr
    priority: int = Field(ge=1)


class Requirements(BaseModel):
    must_have_skills: list[SkillWithPriority] = Field(default_factory=list)
    nice_to_have_skills: list[SkillWithPriority] = Field(default_factory=list)
    soft_skills: list[NonEmptyStr] = Field(default_factory=list)
    experience_years: float = Field(ge=0)
    education: NonEmptyStr


class Responsibilities(BaseModel):
    primary: list[NonEmptyStr] = Field(min_length=1)
    secondary: list[NonEmptyStr] = Field(default_factory=list)


class RoleContext(BaseModel):
    department: NonEmptyStr
    team_size: NonEmptyStr
    key_points: list[NonEmptyStr] = Field(default_factory=list)


class CandidateAlignment(BaseModel):
    strong_matches: list[NonEmptyStr] = Field(default_factory=list)
    gaps_to_address: list[NonEmptyStr] = Field(default_factory=list)
    transferable_skills: list[NonEmptyStr] = Field(default_factory=list)
    emphasis_strategy: NonEmptyStr


class SectionPriorities(BaseModel):
    technical_expertise: list[NonEmptyStr] = Field(default_factory=list)
    experience_focus: NonEmptyStr
    project_relevance: NonEmptyStr


class OptimizationActions(BaseModel):
    LEAD_WITH: list[NonEmptyStr] = Field(default_factory=list)
    EMPHASIZE: list[NonEmptyStr] = Field(default_factory=list)
    QUANTIFY: list[NonEmptyStr] = Field(default_factory=list)
    DOWNPLAY: list[NonEmptyStr] = Field(default_factory=list)


class ApplicationInfo(BaseModel):
    posting_url: Url
    posting_date: NonEmptyStr
    deadline: NonEmptyStr


class ATSAnalysis(BaseModel):
    title_variations: list[NonEmptyStr] = Field(default_factory=list)
    critical_phrases: list[NonEmptyStr] = Field(default_factory=list)


class JobAnalysis(BaseModel):
    company: NonEmptyStr
    position: NonEmptyStr
    job_focus: JobFocus
    location: NonEmptyStr
    employment_type: NonEmptyStr
    experience_level: NonEmptyStr
    requirements: Requirements
    responsibilities: Responsibilities
    role_context: RoleContext
    application_info: ApplicationInfo
    candidate_alignment: CandidateAlignment
    section_priorities: SectionPriorities
    optimization_actions: OptimizationActions
    ats_analysis: ATSAnalysis
