"""Pydantic model for metadata.yaml (not wrapped)."""

from __future__ import annotations

from pydantic import BaseModel

from cv_tailor.models.common import NonEmptyStr


class Metadata(BaseModel):
    company: NonEmptyStr
    position: NonEmptyStr
    last_updated: NonEmptyStr
    transformation_decisions: str | None = None
    job_focus_used: str | None = None
    primary_focus: str | None = None
    job_summary: str | None = None
    active_template: str | None = None
