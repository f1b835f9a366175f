"""Analysis client used by the matching pipeline.

One synchronous generation call per analysis. Failures, including an empty
report, surface as ``AnalysisServiceError`` and are never retried here.
"""
from __future__ import annotations
import logging
from typing import Union

from libs.config import Settings
from libs.matching.errors import AnalysisServiceError
from libs.observability import PerformanceMetrics, counter, timer

from .analysis_prompts import AnalysisPrompt, AnalysisTask
from .provider_base import LLMProvider

logger = logging.getLogger(__name__)


class AnalysisClient:
    def __init__(self, provider: LLMProvider):
        self.provider = provider

    @property
    def model(self) -> str:
        return self.provider.get_model_name()

    def analyze(self, text: str, task: Union[AnalysisTask, str]) -> str:
        """Produce the free-text report for a job or candidate document"""
        try:
            task = AnalysisTask(task)
        except ValueError:
            raise ValueError(f"Unknown analysis task: {task!r}")
        if not text or not text.strip():
            raise AnalysisServiceError("Cannot analyze empty text")

        prompt = AnalysisPrompt.format_prompt(task, text)
        counter(PerformanceMetrics.ANALYSIS_CALLS, tags={"task": task.value, "model": self.model})
        try:
            with timer("analysis", {"task": task.value}):
                response = self.provider.generate(prompt)
        except Exception as e:
            logger.error(f"Analysis call failed ({self.model}, task={task.value}): {e}")
            raise AnalysisServiceError(f"Text-generation service call failed: {e}") from e

        if not response.content.strip():
            raise AnalysisServiceError("Text-generation service returned an empty report")

        logger.debug(f"Analysis for task={task.value} used {response.tokens_used} tokens")
        return response.content


def create_llm_provider(settings: Settings) -> LLMProvider:
    """Factory that returns the configured text-generation provider"""
    if settings.llm_provider == "openai":
        from .openai_provider import OpenAILLMProvider
        return OpenAILLMProvider(
            api_key=settings.openai_api_key,
            model=settings.llm_model,
            timeout=settings.request_timeout,
        )
    if settings.llm_provider == "gemini":
        from .gemini_provider import GeminiLLMProvider
        return GeminiLLMProvider(
            api_key=settings.google_api_key,
            model=settings.llm_model,
            timeout=settings.request_timeout,
        )
    if settings.llm_provider == "mock":
        from .mock_provider import MockLLMProvider
        return MockLLMProvider()
    raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


def create_analysis_client(settings: Settings) -> AnalysisClient:
    return AnalysisClient(create_llm_provider(settings))
