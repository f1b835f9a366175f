"""Tests for environment-driven settings"""
import pytest

from libs.config import Settings
from libs.matching.errors import ConfigurationError


def test_defaults_from_full_environment():
    settings = Settings.from_env({
        "GOOGLE_AI_API_KEY": "g-key",
        "PINECONE_API_KEY": "pc-key",
    })

    assert settings.embedding_provider == "gemini"
    assert settings.embedding_model == "models/embedding-001"
    assert settings.llm_model == "gemini-pro"
    assert settings.vector_backend == "pinecone"
    assert settings.pinecone_index == "talentmatch"
    assert settings.top_k == 5
    assert settings.request_timeout == 30.0


def test_google_api_key_fallback():
    settings = Settings.from_env({"GOOGLE_API_KEY": "g-key", "PINECONE_API_KEY": "pc-key"})
    assert settings.google_api_key == "g-key"


def test_missing_credentials_fail_at_startup():
    with pytest.raises(ConfigurationError) as exc_info:
        Settings.from_env({})

    message = str(exc_info.value)
    assert "GOOGLE_AI_API_KEY" in message
    assert "PINECONE_API_KEY" in message


def test_mock_stack_needs_no_credentials():
    settings = Settings.from_env({
        "TM_EMBEDDING_PROVIDER": "mock",
        "TM_LLM_PROVIDER": "Mock",
        "TM_VECTOR_BACKEND": "memory",
        "TM_TOP_K": "3",
    })

    assert settings.llm_provider == "mock"
    assert settings.top_k == 3


def test_openai_selection_requires_openai_key():
    env = {"TM_EMBEDDING_PROVIDER": "openai", "TM_LLM_PROVIDER": "mock", "TM_VECTOR_BACKEND": "memory"}

    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        Settings.from_env(env)

    settings = Settings.from_env(dict(env, OPENAI_API_KEY="sk-test"))
    assert settings.embedding_model == "text-embedding-3-small"


@pytest.mark.parametrize("name,value", [("TM_TOP_K", "five"), ("TM_REQUEST_TIMEOUT", "soon")])
def test_non_numeric_values_rejected(name, value):
    with pytest.raises(ConfigurationError, match=name):
        Settings.from_env({name: value, "TM_EMBEDDING_PROVIDER": "mock",
                           "TM_LLM_PROVIDER": "mock", "TM_VECTOR_BACKEND": "memory"})


def test_out_of_range_values_reported():
    settings = Settings(embedding_provider="mock", llm_provider="mock", vector_backend="memory",
                        top_k=0, request_timeout=0)

    problems = settings.problems()

    assert "TM_TOP_K must be at least 1" in problems
    assert "TM_REQUEST_TIMEOUT must be positive" in problems


def test_unknown_backend_reported():
    settings = Settings(embedding_provider="mock", llm_provider="mock", vector_backend="faiss")
    assert settings.problems() == ["unsupported vector backend 'faiss'"]


def test_skip_validation():
    settings = Settings.from_env({}, validate=False)
    assert settings.problems()


def test_describe_masks_credentials():
    settings = Settings(google_api_key="g-secret", pinecone_api_key="pc-secret")

    described = settings.describe()

    assert described["google_api_key"] == "set"
    assert described["openai_api_key"] == "unset"
    assert "g-secret" not in str(described)
    assert "pc-secret" not in repr(settings)


def test_log_level_from_environment():
    env = {"TM_EMBEDDING_PROVIDER": "mock", "TM_LLM_PROVIDER": "mock", "TM_VECTOR_BACKEND": "memory"}

    assert Settings.from_env(env).log_level is None
    assert Settings.from_env({**env, "TM_LOG_LEVEL": "debug"}).log_level == "debug"
