"""Tests for the vector store gateway and index backends"""
import threading
import time
from unittest.mock import Mock, patch

import numpy as np
import pytest

from libs.config import Settings
from libs.matching.errors import StoreQueryError, StoreWriteError
from libs.matching.models import IndexRecord, Namespace
from libs.vector.gateway import VectorStoreGateway, create_backend_factory
from libs.vector.memory_backend import InMemoryIndexBackend


@pytest.fixture
def gateway(memory_backend):
    return VectorStoreGateway.from_backend(memory_backend)


def test_query_empty_namespace(gateway):
    assert gateway.query(Namespace.CANDIDATES, [1.0, 0.0], top_k=5) == []


def test_upsert_then_query_sees_record(gateway):
    """A write is visible to the next query in the same namespace"""
    gateway.upsert(Namespace.JOBS, IndexRecord(id="Acme-1", vector=[1.0, 0.0], metadata={"title": "Engineer"}))

    results = gateway.query(Namespace.JOBS, [1.0, 0.0], top_k=5)

    assert len(results) == 1
    assert results[0].id == "Acme-1"
    assert results[0].score == pytest.approx(1.0)
    assert results[0].metadata == {"title": "Engineer"}


def test_namespaces_are_isolated(gateway):
    gateway.upsert(Namespace.JOBS, IndexRecord(id="Acme-1", vector=[1.0, 0.0]))

    assert gateway.query(Namespace.CANDIDATES, [1.0, 0.0], top_k=5) == []


def test_results_ordered_and_bounded(gateway):
    vectors = {
        "a": [1.0, 0.0],
        "b": [0.8, 0.6],
        "c": [0.0, 1.0],
        "d": [-1.0, 0.0],
    }
    for record_id, vector in vectors.items():
        gateway.upsert("candidates", IndexRecord(id=record_id, vector=vector))

    results = gateway.query("candidates", [1.0, 0.0], top_k=3)

    assert [r.id for r in results] == ["a", "b", "c"]
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= s <= 1.0 for s in scores)


def test_negative_similarity_clamped_to_zero(gateway):
    gateway.upsert(Namespace.JOBS, IndexRecord(id="opposite", vector=[-1.0, 0.0]))

    results = gateway.query(Namespace.JOBS, [1.0, 0.0], top_k=1)

    assert results[0].score == 0.0


def test_upsert_overwrites_same_id(gateway, memory_backend):
    gateway.upsert(Namespace.CANDIDATES, IndexRecord(id="jane@example.com", vector=[1.0, 0.0], metadata={"skills": "Go"}))
    gateway.upsert(Namespace.CANDIDATES, IndexRecord(id="jane@example.com", vector=[0.0, 1.0], metadata={"skills": "Rust"}))

    assert memory_backend.count("candidates") == 1
    assert memory_backend.fetch("candidates", "jane@example.com") == {"skills": "Rust"}


def test_query_without_metadata(gateway):
    gateway.upsert(Namespace.JOBS, IndexRecord(id="Acme-1", vector=[1.0, 0.0], metadata={"title": "Engineer"}))

    results = gateway.query(Namespace.JOBS, [1.0, 0.0], top_k=1, include_metadata=False)

    assert results[0].metadata == {}


def test_top_k_must_be_positive(gateway):
    with pytest.raises(ValueError):
        gateway.query(Namespace.JOBS, [1.0], top_k=0)


def test_unknown_namespace_rejected(gateway):
    with pytest.raises(ValueError):
        gateway.upsert("companies", IndexRecord(id="x", vector=[1.0]))


def test_backend_results_resorted_and_truncated():
    """Backend output that is unsorted or too long is still returned best-first and bounded"""
    backend = Mock()
    backend.query.return_value = [
        {"id": "low", "score": 0.2, "metadata": {}},
        {"id": "high", "score": 1.3, "metadata": {}},
        {"id": "mid", "score": 0.5, "metadata": {}},
    ]
    gateway = VectorStoreGateway.from_backend(backend)

    results = gateway.query(Namespace.JOBS, [1.0], top_k=2)

    assert [r.id for r in results] == ["high", "mid"]
    assert results[0].score == 1.0


def test_backend_write_failure_wrapped():
    backend = Mock()
    backend.upsert.side_effect = RuntimeError("index unavailable")
    gateway = VectorStoreGateway.from_backend(backend)

    with pytest.raises(StoreWriteError) as exc_info:
        gateway.upsert(Namespace.JOBS, IndexRecord(id="Acme-1", vector=[1.0]))
    assert exc_info.value.stage == "upsert"


def test_backend_query_failure_wrapped():
    backend = Mock()
    backend.query.side_effect = RuntimeError("index unavailable")
    gateway = VectorStoreGateway.from_backend(backend)

    with pytest.raises(StoreQueryError):
        gateway.query(Namespace.JOBS, [1.0], top_k=5)


def test_connect_failure_wrapped_and_retried():
    factory = Mock(side_effect=[RuntimeError("bad credentials"), InMemoryIndexBackend()])
    gateway = VectorStoreGateway(factory)

    with pytest.raises(StoreQueryError):
        gateway.query(Namespace.JOBS, [1.0], top_k=5)
    assert not gateway.connected

    assert gateway.query(Namespace.JOBS, [1.0], top_k=5) == []
    assert gateway.connected
    assert factory.call_count == 2


def test_lazy_connect_happens_once_under_concurrency():
    calls = []

    def factory():
        calls.append(1)
        time.sleep(0.05)
        return InMemoryIndexBackend()

    gateway = VectorStoreGateway(factory)
    assert not gateway.connected

    backends = []
    threads = [threading.Thread(target=lambda: backends.append(gateway.connect())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(b is backends[0] for b in backends)


def test_cosine_similarity_handles_zero_and_mismatch():
    a = np.array([1.0, 0.0])
    assert InMemoryIndexBackend.cosine_similarity(a, np.array([0.0, 0.0])) == 0.0
    assert InMemoryIndexBackend.cosine_similarity(a, np.array([1.0, 0.0, 0.0])) == 0.0


def test_fetch_missing_record(memory_backend):
    with pytest.raises(KeyError):
        memory_backend.fetch("jobs", "missing")


def test_memory_backend_factory():
    factory = create_backend_factory(Settings(vector_backend="memory"))
    assert isinstance(factory(), InMemoryIndexBackend)


def test_pinecone_backend_calls():
    """Upserts and queries go to the named index with the namespace attached"""
    with patch("libs.vector.pinecone_backend.Pinecone") as pinecone_cls:
        index = pinecone_cls.return_value.Index.return_value
        index.query.return_value = {
            "matches": [{"id": "Acme-1", "score": 0.87, "metadata": {"title": "Engineer"}}],
        }
        settings = Settings(vector_backend="pinecone", pinecone_api_key="pc-key", pinecone_index="talentmatch")
        gateway = VectorStoreGateway(create_backend_factory(settings))

        gateway.upsert(Namespace.JOBS, IndexRecord(id="Acme-1", vector=[0.1, 0.2], metadata={"title": "Engineer"}))
        results = gateway.query(Namespace.JOBS, [0.1, 0.2], top_k=5)

    pinecone_cls.assert_called_once_with(api_key="pc-key")
    pinecone_cls.return_value.Index.assert_called_once_with("talentmatch")
    index.upsert.assert_called_once_with(
        vectors=[{"id": "Acme-1", "values": [0.1, 0.2], "metadata": {"title": "Engineer"}}],
        namespace="jobs",
    )
    index.query.assert_called_once_with(vector=[0.1, 0.2], top_k=5, include_metadata=True, namespace="jobs")
    assert results[0].id == "Acme-1"
    assert results[0].score == pytest.approx(0.87)
