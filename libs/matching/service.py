"""Ingestion boundary called by the transport layer (HTTP routes, CLI).

Validates raw payloads, runs the orchestrator and shapes the response. Every
pipeline failure becomes the same generic error payload; the error kind and
failing stage only go to the log.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from libs.config import Settings
from libs.observability import PerformanceMetrics, counter, get_logger

from .errors import MatchingError, ValidationError
from .models import parse_candidate_submission, parse_job_submission
from .pipeline import MatchingOrchestrator, ServiceBundle

logger = get_logger(__name__)

JOB_FAILURE_MESSAGE = "Failed to process job posting"
CANDIDATE_FAILURE_MESSAGE = "Failed to process application"


def error_payload(message: str, error: MatchingError) -> Dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "errorKind": type(error).__name__,
        "status": 400 if isinstance(error, ValidationError) else 500,
    }


class IngestionService:
    def __init__(self, orchestrator: MatchingOrchestrator):
        self.orchestrator = orchestrator

    def handle_job_ingestion(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Handle a job posting submission"""
        counter(PerformanceMetrics.INGESTION_REQUESTS, tags={"kind": "job"})
        try:
            job = parse_job_submission(payload)
            result = self.orchestrator.ingest_job(job)
        except MatchingError as e:
            counter(PerformanceMetrics.INGESTION_FAILURES, tags={"kind": "job", "stage": e.stage})
            logger.error("Error processing job posting", stage=e.stage,
                         error_kind=type(e).__name__, detail=e.error_message)
            return error_payload(JOB_FAILURE_MESSAGE, e)
        return result.to_payload()

    def handle_candidate_ingestion(
        self,
        payload: Mapping[str, Any],
        resume: Optional[bytes] = None,
    ) -> Dict[str, Any]:
        """Handle a candidate application, with an optional resume PDF"""
        counter(PerformanceMetrics.INGESTION_REQUESTS, tags={"kind": "candidate"})
        try:
            candidate = parse_candidate_submission(payload, resume)
            result = self.orchestrator.ingest_candidate(candidate)
        except MatchingError as e:
            counter(PerformanceMetrics.INGESTION_FAILURES, tags={"kind": "candidate", "stage": e.stage})
            logger.error("Error processing application", stage=e.stage,
                         error_kind=type(e).__name__, detail=e.error_message)
            return error_payload(CANDIDATE_FAILURE_MESSAGE, e)
        return result.to_payload()


def create_ingestion_service(settings: Optional[Settings] = None) -> IngestionService:
    """Build the service clients once and wire them into an ingestion service"""
    settings = settings or Settings.from_env()
    services = ServiceBundle.from_settings(settings)
    return IngestionService(MatchingOrchestrator(services, top_k=settings.top_k))
