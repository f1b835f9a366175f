"""Deterministic LLM provider for local runs and tests."""

import re

from .provider_base import LLMProvider, LLMResponse

SECTION_PATTERN = re.compile(r"^\s*(\d)\.\s+(.+?)\s*$", re.MULTILINE)


class MockLLMProvider(LLMProvider):
    """Answers every numbered section the prompt asks for with a canned line."""

    def __init__(self):
        self.request_count = 0
        self.prompts = []

    def generate(self, prompt: str) -> LLMResponse:
        self.request_count += 1
        self.prompts.append(prompt)

        sections = SECTION_PATTERN.findall(prompt)[:5]
        lines = [f"{number}. {heading}: mock assessment." for number, heading in sections]
        content = "\n".join(lines) or "Mock analysis."
        return LLMResponse(content=content, model_used="mock-llm", tokens_used=len(prompt.split()))

    def get_model_name(self) -> str:
        return "mock-llm"
