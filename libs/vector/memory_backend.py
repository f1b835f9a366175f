"""In-process vector index with cosine similarity.

Used for local runs and tests. Writes are visible to the next query as soon
as ``upsert`` returns.
"""
from __future__ import annotations
import threading
from typing import Any, Dict, List, Tuple

import numpy as np

from .backend_base import VectorIndexBackend


class InMemoryIndexBackend(VectorIndexBackend):
    def __init__(self):
        self._namespaces: Dict[str, Dict[str, Tuple[np.ndarray, Dict[str, Any]]]] = {}
        self._lock = threading.Lock()

    def upsert(self, namespace: str, record_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        with self._lock:
            records = self._namespaces.setdefault(namespace, {})
            records[record_id] = (np.asarray(vector, dtype=np.float32), dict(metadata))

    def query(
        self,
        namespace: str,
        vector: List[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> List[Dict[str, Any]]:
        with self._lock:
            records = list(self._namespaces.get(namespace, {}).items())
        if not records:
            return []

        query_vec = np.asarray(vector, dtype=np.float32)
        hits = []
        for record_id, (stored, metadata) in records:
            hits.append({
                "id": record_id,
                "score": self.cosine_similarity(query_vec, stored),
                "metadata": dict(metadata) if include_metadata else {},
            })
        hits.sort(key=lambda h: h["score"], reverse=True)
        return hits[:top_k]

    def count(self, namespace: str) -> int:
        with self._lock:
            return len(self._namespaces.get(namespace, {}))

    def fetch(self, namespace: str, record_id: str) -> Dict[str, Any]:
        """Stored metadata for one record (KeyError when absent)"""
        with self._lock:
            _, metadata = self._namespaces[namespace][record_id]
            return dict(metadata)

    @staticmethod
    def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
        if a.shape != b.shape:
            return 0.0
        norm = float(np.linalg.norm(a) * np.linalg.norm(b))
        if norm == 0.0:
            return 0.0
        return float(np.dot(a, b) / norm)
