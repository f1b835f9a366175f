"""OpenAI embedding provider implementation."""

import os
from typing import List, Optional

from openai import OpenAI

from .provider_base import EmbeddingProvider


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embedding provider, text-embedding-3-small by default."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "text-embedding-3-small",
        timeout: float = 30.0,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY env var.
            model: OpenAI embedding model to use.
            timeout: Per-request timeout in seconds.
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError("OpenAI API key required. Set OPENAI_API_KEY env var or pass api_key parameter.")

        self.model = model
        self.client = OpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)

    def embed_text(self, text: str) -> List[float]:
        response = self.client.embeddings.create(
            model=self.model,
            input=text,
            encoding_format="float"
        )
        return list(response.data[0].embedding)

    def get_model_name(self) -> str:
        return self.model
