"""Embedding client used by the matching pipeline.

Wraps an EmbeddingProvider so that every call is a single request to the
embedding service: no cache, no retry, and any failure surfaces as
``EmbeddingServiceError``.
"""
from __future__ import annotations
import logging
from typing import List

from libs.config import Settings
from libs.matching.errors import EmbeddingServiceError
from libs.observability import PerformanceMetrics, counter, timer

from .provider_base import EmbeddingProvider

logger = logging.getLogger(__name__)


class EmbeddingClient:
    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider

    @property
    def model(self) -> str:
        return self.provider.get_model_name()

    def embed(self, text: str) -> List[float]:
        """Embed one canonical document"""
        if not text or not text.strip():
            raise EmbeddingServiceError("Cannot embed empty text")

        counter(PerformanceMetrics.EMBEDDING_CALLS, tags={"model": self.model})
        try:
            with timer("embedding", {"model": self.model}):
                vector = self.provider.embed_text(text)
        except Exception as e:
            logger.error(f"Embedding call failed ({self.model}): {e}")
            raise EmbeddingServiceError(f"Embedding service call failed: {e}") from e

        if not vector:
            raise EmbeddingServiceError("Embedding service returned an empty vector")
        return vector


def create_embedding_provider(settings: Settings) -> EmbeddingProvider:
    """Factory that returns the configured embedding provider"""
    if settings.embedding_provider == "openai":
        from .openai_provider import OpenAIEmbeddingProvider
        return OpenAIEmbeddingProvider(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
            timeout=settings.request_timeout,
        )
    if settings.embedding_provider == "gemini":
        from .gemini_provider import GeminiEmbeddingProvider
        return GeminiEmbeddingProvider(
            api_key=settings.google_api_key,
            model=settings.embedding_model,
            timeout=settings.request_timeout,
        )
    if settings.embedding_provider == "mock":
        from .mock_provider import MockEmbeddingProvider
        return MockEmbeddingProvider()
    raise ValueError(f"Unsupported embedding provider: {settings.embedding_provider}")


def create_embedding_client(settings: Settings) -> EmbeddingClient:
    return EmbeddingClient(create_embedding_provider(settings))
