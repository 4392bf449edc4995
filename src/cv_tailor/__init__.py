"""Validate company-specific resume data and generate application documents."""

__version__ = "0.3.0"
