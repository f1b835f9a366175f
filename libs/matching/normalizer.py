"""Render submissions into the canonical text used for embedding and analysis.

Each field is written as ``Label: value`` on its own line in a fixed order.
Empty fields keep their label so the embedded text always has the same shape.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .models import CandidateSubmission, JobSubmission

# (label, attribute on the model, key in a raw payload)
JOB_FIELDS: Sequence[Tuple[str, str, str]] = (
    ("Title", "title", "title"),
    ("Company", "company", "company"),
    ("Location", "location", "location"),
    ("Type", "employment_type", "type"),
    ("Experience Level", "experience_level", "experience"),
    ("Description", "description", "description"),
    ("Requirements", "requirements", "requirements"),
    ("Benefits", "benefits", "benefits"),
)

CANDIDATE_FIELDS: Sequence[Tuple[str, str, str]] = (
    ("Name", "name", "name"),
    ("Email", "email", "email"),
    ("LinkedIn", "linkedin_url", "linkedinUrl"),
    ("Skills", "skills", "skills"),
    ("Experience", "experience", "experience"),
)

RESUME_LABEL = "Resume"


def _value(source: Any, attr: str, key: str) -> str:
    if isinstance(source, Mapping):
        value = source.get(key, source.get(attr))
    else:
        value = getattr(source, attr, None)
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip()


def _render(source: Any, fields: Sequence[Tuple[str, str, str]]) -> list:
    return [f"{label}: {_value(source, attr, key)}" for label, attr, key in fields]


def normalize_job(job: Union[JobSubmission, Mapping[str, Any]]) -> str:
    """Canonical document for a job posting"""
    return "\n".join(_render(job, JOB_FIELDS))


def normalize_candidate(
    candidate: Union[CandidateSubmission, Mapping[str, Any]],
    resume_text: Optional[str] = None,
) -> str:
    """Canonical document for a candidate; resume text goes last under its own label"""
    lines = _render(candidate, CANDIDATE_FIELDS)
    lines.append(f"{RESUME_LABEL}: {(resume_text or '').strip()}")
    return "\n".join(lines)
