"""Base LLM provider interface for document analysis."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """Text returned by the generation service."""
    content: str
    model_used: str
    tokens_used: int = 0


class LLMProvider(ABC):
    """Abstract base class for text-generation providers."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        """Run a single completion for the prompt.

        Args:
            prompt: Fully rendered prompt, document included

        Returns:
            LLMResponse with the free-form text output
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Return the model identifier."""
        pass
