"""Matching pipeline module for TalentMatch

Submissions are normalized into one canonical document, embedded, stored in
their own namespace of the vector index and matched against the opposite
namespace. The orchestrator lives in ``libs.matching.pipeline`` and the
request handlers in ``libs.matching.service``.
"""

from .errors import (
    MatchingError,
    ValidationError,
    ExtractionError,
    EmbeddingServiceError,
    AnalysisServiceError,
    StoreWriteError,
    StoreQueryError,
    ConfigurationError,
)
from .models import (
    Namespace,
    JobSubmission,
    CandidateSubmission,
    IndexRecord,
    MatchResult,
)

__all__ = [
    'MatchingError',
    'ValidationError',
    'ExtractionError',
    'EmbeddingServiceError',
    'AnalysisServiceError',
    'StoreWriteError',
    'StoreQueryError',
    'ConfigurationError',
    'Namespace',
    'JobSubmission',
    'CandidateSubmission',
    'IndexRecord',
    'MatchResult',
]
