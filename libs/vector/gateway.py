"""Vector store gateway: the single point of contact with the vector index.

The backend is created on first use. ``connect()`` is cheap to call before
every operation; concurrent first calls build the backend exactly once.
"""
from __future__ import annotations
import logging
import threading
from typing import Callable, List, Optional, Union

from libs.config import Settings
from libs.matching.errors import StoreQueryError, StoreWriteError
from libs.matching.models import IndexRecord, MatchResult, Namespace
from libs.observability import PerformanceMetrics, counter, histogram, timer

from .backend_base import VectorIndexBackend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], VectorIndexBackend]


class VectorStoreGateway:
    def __init__(self, backend_factory: BackendFactory):
        self._backend_factory = backend_factory
        self._backend: Optional[VectorIndexBackend] = None
        self._lock = threading.Lock()

    @classmethod
    def from_backend(cls, backend: VectorIndexBackend) -> "VectorStoreGateway":
        """Gateway around an already-built backend"""
        return cls(lambda: backend)

    @property
    def connected(self) -> bool:
        return self._backend is not None

    def connect(self) -> VectorIndexBackend:
        """Build the backend once; later calls return the same instance"""
        backend = self._backend
        if backend is not None:
            return backend
        with self._lock:
            if self._backend is None:
                logger.info("Initializing vector index backend")
                self._backend = self._backend_factory()
            return self._backend

    def upsert(self, namespace: Union[Namespace, str], record: IndexRecord) -> None:
        """Write or overwrite exactly one record"""
        namespace = Namespace(namespace)
        try:
            backend = self.connect()
            with timer("vector_store.upsert", {"namespace": namespace.value}):
                backend.upsert(namespace.value, record.id, record.vector, record.metadata)
        except Exception as e:
            logger.error(f"Upsert of '{record.id}' into '{namespace.value}' failed: {e}")
            raise StoreWriteError(f"Vector index upsert failed: {e}") from e

        counter(PerformanceMetrics.VECTOR_UPSERTS, tags={"namespace": namespace.value})
        logger.debug(f"Upserted '{record.id}' into '{namespace.value}'")

    def query(
        self,
        namespace: Union[Namespace, str],
        vector: List[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> List[MatchResult]:
        """Top-K most similar records in a namespace, best first"""
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        namespace = Namespace(namespace)
        try:
            backend = self.connect()
            with timer("vector_store.query", {"namespace": namespace.value}):
                hits = backend.query(namespace.value, vector, top_k, include_metadata)
        except Exception as e:
            logger.error(f"Query against '{namespace.value}' failed: {e}")
            raise StoreQueryError(f"Vector index query failed: {e}") from e

        results = [
            MatchResult(
                id=str(hit["id"]),
                score=min(1.0, max(0.0, float(hit.get("score", 0.0)))),
                metadata=dict(hit.get("metadata") or {}) if include_metadata else {},
            )
            for hit in hits
        ]
        results.sort(key=lambda m: m.score, reverse=True)
        results = results[:top_k]

        counter(PerformanceMetrics.VECTOR_QUERIES, tags={"namespace": namespace.value})
        histogram(PerformanceMetrics.VECTOR_MATCHES_RETURNED, len(results), {"namespace": namespace.value})
        return results


def create_backend_factory(settings: Settings) -> BackendFactory:
    """Deferred constructor for the configured backend"""
    if settings.vector_backend == "pinecone":
        def _pinecone() -> VectorIndexBackend:
            from .pinecone_backend import PineconeIndexBackend
            return PineconeIndexBackend(
                api_key=settings.pinecone_api_key,
                index_name=settings.pinecone_index,
                host=settings.pinecone_host,
            )
        return _pinecone
    if settings.vector_backend == "memory":
        from .memory_backend import InMemoryIndexBackend
        return InMemoryIndexBackend
    raise ValueError(f"Unsupported vector backend: {settings.vector_backend}")


def create_vector_gateway(settings: Settings) -> VectorStoreGateway:
    return VectorStoreGateway(create_backend_factory(settings))
