"""Shared fixtures: mock providers wired to an in-memory vector index"""
import pytest

from libs.embed.client import EmbeddingClient
from libs.embed.mock_provider import MockEmbeddingProvider
from libs.llm.client import AnalysisClient
from libs.llm.mock_provider import MockLLMProvider
from libs.matching.pipeline import MatchingOrchestrator, ServiceBundle
from libs.matching.service import IngestionService
from libs.observability import get_metrics_collector
from libs.resume.parser import ResumeParser
from libs.vector.gateway import VectorStoreGateway
from libs.vector.memory_backend import InMemoryIndexBackend


@pytest.fixture(autouse=True)
def clear_metrics():
    get_metrics_collector().clear()
    yield
    get_metrics_collector().clear()


@pytest.fixture
def job_payload():
    return {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Remote",
        "type": "full-time",
        "experience": "senior",
        "description": "Build and run Python services",
        "requirements": "Python, SQL, AWS",
        "benefits": "Remote stipend",
    }


@pytest.fixture
def candidate_payload():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "linkedinUrl": "https://www.linkedin.com/in/janedoe",
        "skills": "Python, SQL, AWS",
        "experience": "Six years building backend services",
    }


@pytest.fixture
def memory_backend():
    return InMemoryIndexBackend()


@pytest.fixture
def llm_provider():
    return MockLLMProvider()


@pytest.fixture
def services(memory_backend, llm_provider):
    return ServiceBundle(
        embedding=EmbeddingClient(MockEmbeddingProvider()),
        analysis=AnalysisClient(llm_provider),
        vector_store=VectorStoreGateway.from_backend(memory_backend),
        resume_parser=ResumeParser(),
    )


@pytest.fixture
def orchestrator(services):
    return MatchingOrchestrator(services, top_k=5)


@pytest.fixture
def ingestion_service(orchestrator):
    return IngestionService(orchestrator)
