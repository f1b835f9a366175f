"""Deterministic embedding provider for local runs and tests."""

import hashlib
from typing import List

from .provider_base import EmbeddingProvider


class MockEmbeddingProvider(EmbeddingProvider):
    """Derives a repeatable vector from the SHA-256 of the text.

    Identical texts always embed identically, so a record queried with its own
    vector comes back with similarity 1.0.
    """

    def __init__(self, dimensions: int = 64):
        self.dimensions = dimensions
        self.request_count = 0

    def embed_text(self, text: str) -> List[float]:
        embedding: List[float] = []
        counter = 0
        while len(embedding) < self.dimensions:
            digest = hashlib.sha256(f"{counter}:{text}".encode("utf-8")).hexdigest()
            for i in range(0, len(digest), 8):
                int_val = int(digest[i:i + 8], 16)
                embedding.append((int_val / (16 ** 8)) * 2 - 1)  # scale to [-1, 1]
            counter += 1

        self.request_count += 1
        return embedding[:self.dimensions]

    def get_model_name(self) -> str:
        return "mock-embedding"
