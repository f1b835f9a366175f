"""Core matching pipeline implementation

Bidirectional ingestion: a job posting is embedded, stored in the ``jobs``
namespace and matched against ``candidates``; a candidate profile goes the
other way. Within one request the external calls run in a fixed order:

    normalize -> embed -> upsert -> analyze -> query

Any failure short-circuits the remaining steps. Completed side effects are
not rolled back: a stored vector stays stored even when analysis or the
match query fails afterwards.
"""
from __future__ import annotations
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from libs.config import Settings
from libs.embed.client import EmbeddingClient, create_embedding_client
from libs.llm.analysis_prompts import AnalysisTask
from libs.llm.client import AnalysisClient, create_analysis_client
from libs.observability import get_logger, timer
from libs.resume.parser import ResumeParser, create_resume_parser
from libs.vector.gateway import VectorStoreGateway, create_vector_gateway

from .errors import MatchingError
from .models import (
    CandidateIngestionResult,
    CandidateMetadata,
    CandidateSubmission,
    IndexRecord,
    JobIngestionResult,
    JobMetadata,
    JobSubmission,
    Namespace,
)
from .normalizer import normalize_candidate, normalize_job

logger = get_logger(__name__)

DEFAULT_TOP_K = 5


class MatchingStage(Enum):
    """Steps of one ingestion request, in execution order"""
    EXTRACTION = "extraction"
    NORMALIZATION = "normalization"
    EMBEDDING = "embedding"
    UPSERT = "upsert"
    ANALYSIS = "analysis"
    QUERY = "query"


class JobIdGenerator:
    """Issues ``{company}-{timestamp_ms}`` ids.

    The millisecond suffix never repeats within a process: a request landing in
    the same millisecond as the previous one gets the next integer instead.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last_ms = 0
        self._lock = threading.Lock()

    def next_id(self, company: str, at: Optional[datetime] = None) -> str:
        """Id for a posting ingested at ``at`` (the clock is read when omitted)"""
        seconds = at.timestamp() if at is not None else self._clock()
        with self._lock:
            now_ms = int(seconds * 1000)
            if now_ms <= self._last_ms:
                now_ms = self._last_ms + 1
            self._last_ms = now_ms
        return f"{company}-{now_ms}"


@dataclass
class ServiceBundle:
    """External service clients shared by every request"""
    embedding: EmbeddingClient
    analysis: AnalysisClient
    vector_store: VectorStoreGateway
    resume_parser: ResumeParser

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceBundle":
        settings.validate()
        return cls(
            embedding=create_embedding_client(settings),
            analysis=create_analysis_client(settings),
            vector_store=create_vector_gateway(settings),
            resume_parser=create_resume_parser(),
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MatchingOrchestrator:
    """Runs the two ingestion entry points against a service bundle"""

    def __init__(
        self,
        services: ServiceBundle,
        top_k: int = DEFAULT_TOP_K,
        id_generator: Optional[JobIdGenerator] = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        self.services = services
        self.top_k = top_k
        self.id_generator = id_generator or JobIdGenerator()
        self._now = now

    def ingest_job(self, job: JobSubmission) -> JobIngestionResult:
        """Store a job posting and find the closest candidates"""
        with timer("ingestion.job"):
            namespace = Namespace.JOBS
            document = self._run(MatchingStage.NORMALIZATION, job.company, lambda: normalize_job(job))

            vector = self._run(MatchingStage.EMBEDDING, job.company,
                               lambda: self.services.embedding.embed(document))

            ingested_at = self._now()
            job_id = self.id_generator.next_id(job.company, ingested_at)
            metadata = JobMetadata(
                title=job.title,
                company=job.company,
                location=job.location,
                type=job.employment_type.value,
                experience=job.experience_level.value,
                timestamp=ingested_at.isoformat(),
            )
            record = IndexRecord(id=job_id, vector=vector, metadata=metadata.to_dict())
            self._run(MatchingStage.UPSERT, job_id,
                      lambda: self.services.vector_store.upsert(namespace, record))

            analysis = self._run(MatchingStage.ANALYSIS, job_id,
                                 lambda: self.services.analysis.analyze(document, AnalysisTask.JOB))

            matches = self._run(MatchingStage.QUERY, job_id,
                                lambda: self.services.vector_store.query(
                                    namespace.opposite, vector, self.top_k, include_metadata=True))

        logger.info("Job ingested", job_id=job_id, matches=len(matches))
        return JobIngestionResult(job_id=job_id, analysis=analysis, matching_candidates=matches)

    def ingest_candidate(
        self,
        candidate: CandidateSubmission,
        resume: Optional[bytes] = None,
    ) -> CandidateIngestionResult:
        """Store a candidate profile and find the closest job postings"""
        candidate_id = candidate.email
        resume = resume if resume is not None else candidate.resume

        with timer("ingestion.candidate"):
            namespace = Namespace.CANDIDATES
            resume_text = ""
            if resume is not None:
                parsed = self._run(MatchingStage.EXTRACTION, candidate_id,
                                   lambda: self.services.resume_parser.parse_bytes(resume))
                resume_text = parsed.text
                # signals are informational only; the raw text is what gets embedded
                logger.debug(
                    "Resume signals extracted",
                    candidate_id=candidate_id,
                    skills=sorted(parsed.skills),
                    education_lines=len(parsed.education),
                    experience_lines=len(parsed.experience),
                )

            document = self._run(MatchingStage.NORMALIZATION, candidate_id,
                                 lambda: normalize_candidate(candidate, resume_text))

            vector = self._run(MatchingStage.EMBEDDING, candidate_id,
                               lambda: self.services.embedding.embed(document))

            metadata = CandidateMetadata(
                name=candidate.name,
                email=candidate.email,
                linkedin_url=candidate.linkedin_url,
                skills=candidate.skills,
                experience=candidate.experience,
                timestamp=self._now().isoformat(),
            )
            record = IndexRecord(id=candidate_id, vector=vector, metadata=metadata.to_dict())
            self._run(MatchingStage.UPSERT, candidate_id,
                      lambda: self.services.vector_store.upsert(namespace, record))

            analysis = self._run(MatchingStage.ANALYSIS, candidate_id,
                                 lambda: self.services.analysis.analyze(document, AnalysisTask.CANDIDATE))

            matches = self._run(MatchingStage.QUERY, candidate_id,
                                lambda: self.services.vector_store.query(
                                    namespace.opposite, vector, self.top_k, include_metadata=True))

        logger.info("Candidate ingested", candidate_id=candidate_id, matches=len(matches))
        return CandidateIngestionResult(candidate_id=candidate_id, analysis=analysis, matching_jobs=matches)

    def _run(self, stage: MatchingStage, entity_id: str, step: Callable):
        """Run one step, logging which step failed for which entity"""
        logger.debug("Ingestion step started", stage=stage.value, entity_id=entity_id)
        try:
            with timer("ingestion.step", {"stage": stage.value}):
                return step()
        except MatchingError as e:
            logger.error(
                "Ingestion step failed",
                stage=stage.value,
                entity_id=entity_id,
                error_kind=type(e).__name__,
            )
            raise
