"""Shared test fixtures."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest
import yaml

from cv_tailor.config import AppConfig, PathsConfig, WatchConfig

COMPANY = "tech-corp"


@pytest.fixture
def metadata_data() -> dict:
    return {
        "company": "Tech Corp",
        "position": "Senior Backend Engineer",
        "last_updated": "2026-10-01",
        "job_focus_used": "senior_engineer + [python, aws]",
        "primary_focus": "senior_engineer + [python, aws]",
        "job_summary": "Build and scale the payments platform",
    }


@pytest.fixture
def contact_data() -> dict:
    return {
        "name": "Alex Kim",
        "phone": "+1 555 0100",
        "email": "alex@example.com",
        "address": "Toronto, ON",
        "linkedin": "https://linkedin.com/in/alexkim",
        "github": "https://github.com/alexkim",
    }


@pytest.fixture
def resume_data(contact_data) -> dict:
    return {
        "name": "Alex Kim",
        "profile_picture": "alex.jpg",
        "title": "Senior Backend Engineer",
        "summary": "Backend engineer with **8 years** of experience in payments.",
        "contact": contact_data,
        "technical_expertise": [
            {"resume_title": "Backend", "skills": ["Python", "PostgreSQL", "Kafka"]},
            {"resume_title": "Cloud", "skills": ["AWS", "Terraform"]},
        ],
        "skills": ["API design", "Mentoring"],
        "languages": [{"language": "English", "proficiency": "Native"}],
        "professional_experience": [
            {
                "company": "PayFlow",
                "position": "Staff Engineer",
                "location": "Remote",
                "duration": "2021 - Present",
                "company_description": "Payments infrastructure for marketplaces.",
                "achievements": ["Cut settlement latency by 40%", "Led a team of 5"],
            }
        ],
        "independent_projects": [
            {
                "name": "ledgerlite",
                "description": "Double-entry ledger library.",
                "location": "GitHub",
                "duration": "2023",
                "url": "https://github.com/alexkim/ledgerlite",
                "achievements": ["1.2k stars"],
            }
        ],
        "education": [
            {
                "institution": "University of Waterloo",
                "program": "BSc Computer Science",
                "location": "Waterloo, ON",
                "duration": "2012 - 2016",
            }
        ],
    }


@pytest.fixture
def job_analysis_data() -> dict:
    return {
        "company": "Tech Corp",
        "position": "Senior Backend Engineer",
        "job_focus": [
            {"primary_area": "senior_engineer", "specialties": ["python", "aws"], "weight": 0.7},
            {"primary_area": "tech_lead", "specialties": ["architecture"], "weight": 0.3},
        ],
        "location": "Toronto, ON",
        "employment_type": "Full-time",
        "experience_level": "Senior",
        "requirements": {
            "must_have_skills": [{"skill": "Python", "priority": 1}, {"skill": "AWS", "priority": 2}],
            "nice_to_have_skills": [{"skill": "Kafka", "priority": 1}],
            "soft_skills": ["Communication"],
            "experience_years": 6,
            "education": "Bachelor's degree or equivalent",
        },
        "responsibilities": {
            "primary": ["Design and operate payment services"],
            "secondary": ["Mentor engineers"],
        },
        "role_context": {
            "department": "Payments",
            "team_size": "8 engineers",
            "key_points": ["High-volume transactions"],
        },
        "application_info": {
            "posting_url": "https://techcorp.example.com/jobs/123",
            "posting_date": "2026-09-20",
            "deadline": "2026-11-01",
        },
        "candidate_alignment": {
            "strong_matches": ["Payments background"],
            "gaps_to_address": [],
            "transferable_skills": ["Team leadership"],
            "emphasis_strategy": "Lead with payments scale",
        },
        "section_priorities": {
            "technical_expertise": ["Backend", "Cloud"],
            "experience_focus": "PayFlow",
            "project_relevance": "ledgerlite",
        },
        "optimization_actions": {
            "LEAD_WITH": ["Payments"],
            "EMPHASIZE": ["AWS"],
            "QUANTIFY": ["Latency"],
            "DOWNPLAY": [],
        },
        "ats_analysis": {
            "title_variations": ["Senior Software Engineer"],
            "critical_phrases": ["payment processing"],
        },
    }


@pytest.fixture
def cover_letter_data(contact_data, job_analysis_data) -> dict:
    return {
        "company": "Tech Corp",
        "position": "Senior Backend Engineer",
        "job_focus": copy.deepcopy(job_analysis_data["job_focus"]),
        "primary_focus": "senior_engineer",
        "date": "October 19, 2026",
        "personal_info": contact_data,
        "content": {
            "letter_title": "Application for Senior Backend Engineer",
            "opening_line": "Dear Hiring Team,",
            "body": ["I build payment systems.", "I would love to help **Tech Corp** scale."],
            "signature": "Alex Kim",
        },
    }


@pytest.fixture
def company_files(metadata_data, resume_data, job_analysis_data, cover_letter_data) -> dict:
    """File name -> YAML document as stored on disk (wrapped where required)."""
    return {
        "metadata.yaml": metadata_data,
        "resume.yaml": {"resume": resume_data},
        "job_analysis.yaml": {"job_analysis": job_analysis_data},
        "cover_letter.yaml": {"cover_letter": cover_letter_data},
    }


def write_company(base: Path, name: str, documents: dict) -> Path:
    """Write ``documents`` (file name -> data or raw text) into ``base/name``."""
    directory = base / name
    directory.mkdir(parents=True, exist_ok=True)
    for file_name, content in documents.items():
        text = content if isinstance(content, str) else yaml.safe_dump(content, sort_keys=False)
        (directory / file_name).write_text(text, encoding="utf-8")
    return directory


@pytest.fixture
def tailor_base(tmp_path) -> Path:
    base = tmp_path / "resume-data" / "tailor"
    base.mkdir(parents=True)
    return base


@pytest.fixture
def company_dir(tailor_base, company_files) -> Path:
    return write_company(tailor_base, COMPANY, company_files)


@pytest.fixture
def settings(tmp_path) -> AppConfig:
    return AppConfig(
        paths=PathsConfig(project_root=str(tmp_path)),
        watch=WatchConfig(debounce_ms=50, poll_interval=0.05),
    )


@pytest.fixture
def make_company(tailor_base):
    """Factory: ``make_company(name, documents)`` writes a company folder."""

    def make(name: str, documents: dict) -> Path:
        return write_company(tailor_base, name, documents)

    return make
