"""Base interface for vector index backends."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class VectorIndexBackend(ABC):
    """A namespaced vector index: upsert by id and top-K similarity query."""

    @abstractmethod
    def upsert(self, namespace: str, record_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        """Insert or overwrite one record."""
        pass

    @abstractmethod
    def query(
        self,
        namespace: str,
        vector: List[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> List[Dict[str, Any]]:
        """Return up to top_k hits as ``{"id", "score", "metadata"}`` dicts."""
        pass
