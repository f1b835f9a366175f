"""Embedding providers and the pipeline-facing embedding client"""
from .provider_base import EmbeddingProvider
from .mock_provider import MockEmbeddingProvider
from .client import EmbeddingClient, create_embedding_client, create_embedding_provider

__all__ = [
    'EmbeddingProvider',
    'MockEmbeddingProvider',
    'EmbeddingClient',
    'create_embedding_client',
    'create_embedding_provider',
]
