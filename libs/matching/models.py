"""Data model for the matching pipeline.

Submissions are pydantic models validated at the boundary; everything derived
from them (index records, metadata, match results) is a plain dataclass.
"""
from __future__ import annotations
import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydValidationError

from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Namespace(str, Enum):
    """Partitions of the shared vector index"""
    JOBS = "jobs"
    CANDIDATES = "candidates"

    @property
    def opposite(self) -> "Namespace":
        return Namespace.CANDIDATES if self is Namespace.JOBS else Namespace.JOBS


class EmploymentType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID_LEVEL = "mid-level"
    SENIOR = "senior"
    LEAD = "lead"


class JobSubmission(BaseModel):
    """A job posting as submitted through the posting form"""
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        str_min_length=1,
        frozen=True,
    )

    title: str
    company: str
    location: str
    employment_type: EmploymentType = Field(alias="type")
    experience_level: ExperienceLevel = Field(alias="experience")
    description: str
    requirements: str
    benefits: str

    @field_validator("employment_type", "experience_level", mode="before")
    @classmethod
    def _normalize_choice(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class CandidateSubmission(BaseModel):
    """A candidate profile as submitted through the application form"""
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        str_min_length=1,
        frozen=True,
    )

    name: str
    email: str
    linkedin_url: str = Field(alias="linkedinUrl")
    skills: str
    experience: str
    resume: Optional[bytes] = Field(default=None, repr=False)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        if not EMAIL_PATTERN.match(v):
            raise ValueError("invalid email address")
        return v

    @field_validator("linkedin_url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("profile URL must be an absolute http(s) URL")
        return v


def _describe(exc: PydValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_job_submission(payload: Mapping[str, Any]) -> JobSubmission:
    """Validate a raw job payload, raising ValidationError on any problem"""
    try:
        return JobSubmission.model_validate(dict(payload))
    except PydValidationError as e:
        raise ValidationError(_describe(e)) from e


def parse_candidate_submission(payload: Mapping[str, Any], resume: Optional[bytes] = None) -> CandidateSubmission:
    """Validate a raw candidate payload, raising ValidationError on any problem"""
    data = dict(payload)
    if resume is not None:
        data["resume"] = resume
    try:
        return CandidateSubmission.model_validate(data)
    except PydValidationError as e:
        raise ValidationError(_describe(e)) from e


@dataclass(frozen=True)
class JobMetadata:
    """Metadata stored with every record in the jobs namespace"""
    title: str
    company: str
    location: str
    type: str
    experience: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CandidateMetadata:
    """Metadata stored with every record in the candidates namespace"""
    name: str
    email: str
    linkedin_url: str
    skills: str
    experience: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IndexRecord:
    id: str
    vector: List[float]
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MatchResult:
    """One hit from a top-K query"""
    id: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "score": self.score, "metadata": dict(self.metadata)}


@dataclass
class JobIngestionResult:
    job_id: str
    analysis: str
    matching_candidates: List[MatchResult]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": True,
            "jobId": self.job_id,
            "analysis": self.analysis,
            "matchingCandidates": [m.to_dict() for m in self.matching_candidates],
        }


@dataclass
class CandidateIngestionResult:
    candidate_id: str
    analysis: str
    matching_jobs: List[MatchResult]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": True,
            "analysis": self.analysis,
            "matchingJobs": [m.to_dict() for m in self.matching_jobs],
        }
