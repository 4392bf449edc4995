"""Pydantic models for resume.yaml (payload under the ``resume`` key)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cv_tailor.models.common import ContactDetails, NonEmptyStr, Url


class Expertise(BaseModel):
    resume_title: NonEmptyStr
    skills: list[NonEmptyStr] = Field(min_length=1)


class Language(BaseModel):
    language: NonEmptyStr
    proficiency: NonEmptyStr


class Education(BaseModel):
    institution: NonEmptyStr
    program: NonEmptyStr
    location: NonEmptyStr
    duration: NonEmptyStr


class ProfessionalExperience(BaseModel):
    company: NonEmptyStr
    position: NonEmptyStr
    location: NonEmptyStr
    duration: NonEmptyStr
    company_description: NonEmptyStr
    linkedin: Url | None = None
    achievements: list[NonEmptyStr] = Field(min_length=1)


class IndependentProject(BaseModel):
    name: NonEmptyStr
    description: NonEmptyStr
    location: NonEmptyStr
    duration: NonEmptyStr
    url: Url | None = None
    achievements: list[NonEmptyStr] = Field(min_length=1)
    impact: str | None = None


class Resume(BaseModel):
    name: NonEmptyStr
    profile_picture: NonEmptyStr
    title: NonEmptyStr
    summary: NonEmptyStr  # Markdown allowed
    contact: ContactDetails
    technical_expertise: list[Expertise] = Field(min_length=1)
    skills: list[NonEmptyStr] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    professional_experience: list[ProfessionalExperience] = Field(default_factory=list)
    independent_projects: list[IndependentProject] = Field(default_factory=list)
    education: list[Education] = Field(min_length=1)
