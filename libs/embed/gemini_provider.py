"""Gemini embedding provider implementation."""

import os
from typing import List, Optional

import google.generativeai as genai

from .provider_base import EmbeddingProvider


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Google Generative AI embeddings (models/embedding-001 by default)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "models/embedding-001",
        timeout: float = 30.0,
    ):
        self.api_key = api_key or os.getenv("GOOGLE_AI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError("Google AI API key required. Set GOOGLE_AI_API_KEY env var or pass api_key parameter.")

        self.model = model if model.startswith("models/") else f"models/{model}"
        self.timeout = timeout
        genai.configure(api_key=self.api_key)

    def embed_text(self, text: str) -> List[float]:
        result = genai.embed_content(
            model=self.model,
            content=text,
            task_type="semantic_similarity",
            request_options={"timeout": self.timeout},
        )
        return list(result["embedding"])

    def get_model_name(self) -> str:
        return self.model
