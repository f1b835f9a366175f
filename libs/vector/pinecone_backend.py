"""Pinecone implementation of the vector index backend.

One shared index holds both entity types; namespaces keep job and candidate
records apart.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from pinecone import Pinecone

from .backend_base import VectorIndexBackend

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


class PineconeIndexBackend(VectorIndexBackend):
    def __init__(self, api_key: str, index_name: str, host: Optional[str] = None):
        if not api_key:
            raise ValueError("Pinecone API key required. Set PINECONE_API_KEY.")

        self.index_name = index_name
        self.client = Pinecone(api_key=api_key)
        if host:
            self.index = self.client.Index(index_name, host=host)
        else:
            self.index = self.client.Index(index_name)
        logger.info(f"Connected to Pinecone index '{index_name}'")

    def upsert(self, namespace: str, record_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        self.index.upsert(
            vectors=[{"id": record_id, "values": vector, "metadata": metadata}],
            namespace=namespace,
        )

    def query(
        self,
        namespace: str,
        vector: List[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> List[Dict[str, Any]]:
        response = self.index.query(
            vector=vector,
            top_k=top_k,
            include_metadata=include_metadata,
            namespace=namespace,
        )
        matches = _field(response, "matches") or []
        return [
            {
                "id": _field(match, "id"),
                "score": float(_field(match, "score", 0.0) or 0.0),
                "metadata": dict(_field(match, "metadata") or {}),
            }
            for match in matches
        ]
