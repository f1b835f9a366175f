"""Text-generation providers and the analysis client"""
from .provider_base import LLMProvider, LLMResponse
from .analysis_prompts import AnalysisPrompt, AnalysisTask
from .mock_provider import MockLLMProvider
from .client import AnalysisClient, create_analysis_client, create_llm_provider

__all__ = [
    'LLMProvider',
    'LLMResponse',
    'AnalysisPrompt',
    'AnalysisTask',
    'MockLLMProvider',
    'AnalysisClient',
    'create_analysis_client',
    'create_llm_provider',
]
