"""The assembled bundle handed to the renderer."""

from __future__ import annotations

from pydantic import BaseModel

from cv_tailor.models.cover_letter import CoverLetter
from cv_tailor.models.job import JobAnalysis
from cv_tailor.models.metadata import Metadata
from cv_tailor.models.resume import Resume


class ApplicationData(BaseModel):
    """Validated fragments for one company. A ``None`` fragment means "nothing to render"."""

    metadata: Metadata | None = None
    resume: Resume | None = None
    job_analysis: JobAnalysis | None = None
    cover_letter: CoverLetter | None = None
