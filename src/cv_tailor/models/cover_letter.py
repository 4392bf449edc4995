"""Pydantic models for cover_letter.yaml (payload under ``cover_letter``)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cv_tailor.models.common import ContactDetails, NonEmptyStr
from cv_tailor.models.job import JobFocus


class CoverLetterContent(BaseModel):
    letter_title: NonEmptyStr
    opening_line: NonEmptyStr
    body: list[NonEmptyStr] = Field(min_length=1)  # one Markdown paragraph per entry
    signature: NonEmptyStr


class CoverLetter(BaseModel):
    company: NonEmptyStr
    position: NonEmptyStr
    job_focus: JobFocus
    primary_focus: NonEmptyStr
    date: NonEmptyStr
    personal_info: ContactDetails
    content: CoverLetterContent
