"""Error kinds raised by the matching pipeline.

Every error carries the pipeline stage it was raised from so the ingestion
boundary can log which step failed without inspecting internal state.
"""
from __future__ import annotations
from typing import Optional


class MatchingError(Exception):
    """Base class for per-request pipeline failures"""

    stage = "pipeline"

    def __init__(self, error_message: str, stage: Optional[str] = None):
        self.error_message = error_message
        if stage is not None:
            self.stage = stage
        super().__init__(f"{self.stage} failed: {error_message}")


class ValidationError(MatchingError):
    """Malformed submission, rejected before any external call"""
    stage = "validation"


class ExtractionError(MatchingError):
    """Resume document could not be read"""
    stage = "extraction"


class EmbeddingServiceError(MatchingError):
    stage = "embedding"


class AnalysisServiceError(MatchingError):
    stage = "analysis"


class StoreWriteError(MatchingError):
    stage = "upsert"


class StoreQueryError(MatchingError):
    stage = "query"


class ConfigurationError(Exception):
    """Missing or invalid settings detected at startup"""
