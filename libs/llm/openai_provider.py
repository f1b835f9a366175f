"""OpenAI LLM provider for job and candidate analysis."""

import os
from typing import Optional

from openai import OpenAI

from .provider_base import LLMProvider, LLMResponse


class OpenAILLMProvider(LLMProvider):
    """OpenAI chat-completions provider (gpt-4o-mini by default)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_tokens: int = 1200,
    ):
        """Initialize OpenAI LLM provider.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY env var.
            model: OpenAI model to use (gpt-4o, gpt-4o-mini, etc.)
            timeout: Per-request timeout in seconds.
            max_tokens: Upper bound on the generated report.
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError("OpenAI API key required. Set OPENAI_API_KEY env var or pass api_key parameter.")

        self.model = model
        self.max_tokens = max_tokens
        self.client = OpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)

    def generate(self, prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.3,
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content or ""
        tokens_used = response.usage.total_tokens if response.usage else 0
        return LLMResponse(content=content.strip(), model_used=self.model, tokens_used=tokens_used)

    def get_model_name(self) -> str:
        return self.model
