"""Schemas for the four data fragments, the assembled bundle and the context file."""

from cv_tailor.models.application import ApplicationData
from cv_tailor.models.common import ContactDetails
from cv_tailor.models.context import (
    ContextValidation,
    JobDetails,
    TailorContext,
    TailorContextRequired,
    validate_tailor_context,
    validate_tailor_context_strict,
)
from cv_tailor.models.cover_letter import CoverLetter, CoverLetterContent
from cv_tailor.models.job import JobAnalysis, JobFocus, JobFocusItem
from cv_tailor.models.metadata import Metadata
from cv_tailor.models.resume import Resume

__all__ = [
    "ApplicationData",
    "ContactDetails",
    "ContextValidation",
    "CoverLetter",
    "CoverLetterContent",
    "JobAnalysis",
    "JobDetails",
    "JobFocus",
    "JobFocusItem",
    "Metadata",
    "Resume",
    "TailorContext",
    "TailorContextRequired",
    "validate_tailor_context",
    "validate_tailor_context_strict",
]
