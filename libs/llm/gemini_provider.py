"""Gemini LLM provider for job and candidate analysis."""

import os
from typing import Optional

import google.generativeai as genai

from .provider_base import LLMProvider, LLMResponse


class GeminiLLMProvider(LLMProvider):
    """Google Generative AI provider (gemini-pro by default)."""

    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-pro", timeout: float = 30.0):
        self.api_key = api_key or os.getenv("GOOGLE_AI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError("Google AI API key required. Set GOOGLE_AI_API_KEY env var or pass api_key parameter.")

        self.model = model
        self.timeout = timeout
        genai.configure(api_key=self.api_key)
        self._model = genai.GenerativeModel(model)

    def generate(self, prompt: str) -> LLMResponse:
        response = self._model.generate_content(prompt, request_options={"timeout": self.timeout})
        usage = getattr(response, "usage_metadata", None)
        tokens_used = getattr(usage, "total_token_count", 0) if usage else 0
        return LLMResponse(content=response.text.strip(), model_used=self.model, tokens_used=tokens_used)

    def get_model_name(self) -> str:
        return self.model
