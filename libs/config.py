"""Runtime settings for TalentMatch.

Everything is read from the environment (a local ``.env`` is loaded first when
present). A provider or backend whose credential is missing is a startup
error: ``Settings.from_env()`` raises ``ConfigurationError`` instead of letting
the first request fail.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

from libs.matching.errors import ConfigurationError


PROVIDERS = {"gemini", "openai", "mock"}
VECTOR_BACKENDS = {"pinecone", "memory"}

DEFAULT_EMBEDDING_MODELS = {
    "gemini": "models/embedding-001",
    "openai": "text-embedding-3-small",
    "mock": "mock-embedding",
}
DEFAULT_LLM_MODELS = {
    "gemini": "gemini-pro",
    "openai": "gpt-4o-mini",
    "mock": "mock-llm",
}


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


@dataclass
class Settings:
    """Service endpoints, credentials and pipeline knobs"""
    embedding_provider: str = "gemini"
    llm_provider: str = "gemini"
    embedding_model: Optional[str] = None
    llm_model: Optional[str] = None
    vector_backend: str = "pinecone"

    google_api_key: Optional[str] = field(default=None, repr=False)
    openai_api_key: Optional[str] = field(default=None, repr=False)
    pinecone_api_key: Optional[str] = field(default=None, repr=False)
    pinecone_index: str = "talentmatch"
    pinecone_host: Optional[str] = None

    top_k: int = 5
    request_timeout: float = 30.0
    log_level: Optional[str] = None

    def __post_init__(self):
        self.embedding_provider = self.embedding_provider.lower()
        self.llm_provider = self.llm_provider.lower()
        self.vector_backend = self.vector_backend.lower()
        if self.embedding_model is None:
            self.embedding_model = DEFAULT_EMBEDDING_MODELS.get(self.embedding_provider)
        if self.llm_model is None:
            self.llm_model = DEFAULT_LLM_MODELS.get(self.llm_provider)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, validate: bool = True) -> "Settings":
        """Build and validate settings from environment variables"""
        if env is None:
            load_dotenv()
            env = os.environ

        settings = cls(
            embedding_provider=env.get("TM_EMBEDDING_PROVIDER", "gemini"),
            llm_provider=env.get("TM_LLM_PROVIDER", "gemini"),
            embedding_model=env.get("TM_EMBEDDING_MODEL") or None,
            llm_model=env.get("TM_LLM_MODEL") or None,
            vector_backend=env.get("TM_VECTOR_BACKEND", "pinecone"),
            google_api_key=env.get("GOOGLE_AI_API_KEY") or env.get("GOOGLE_API_KEY"),
            openai_api_key=env.get("OPENAI_API_KEY"),
            pinecone_api_key=env.get("PINECONE_API_KEY"),
            pinecone_index=env.get("PINECONE_INDEX") or "talentmatch",
            pinecone_host=env.get("PINECONE_HOST") or None,
            top_k=_int(env, "TM_TOP_K", 5),
            request_timeout=_float(env, "TM_REQUEST_TIMEOUT", 30.0),
            log_level=env.get("TM_LOG_LEVEL") or None,
        )
        if validate:
            settings.validate()
        return settings

    def validate(self) -> None:
        """Fail fast on unknown providers or missing credentials"""
        problems = self.problems()
        if problems:
            raise ConfigurationError("Invalid configuration: " + "; ".join(problems))

    def problems(self) -> List[str]:
        problems = []
        for role, provider in (("embedding", self.embedding_provider), ("llm", self.llm_provider)):
            if provider not in PROVIDERS:
                problems.append(f"unsupported {role} provider '{provider}'")
            elif provider == "gemini" and not self.google_api_key:
                problems.append(f"GOOGLE_AI_API_KEY is required for the {role} provider")
            elif provider == "openai" and not self.openai_api_key:
                problems.append(f"OPENAI_API_KEY is required for the {role} provider")

        if self.vector_backend not in VECTOR_BACKENDS:
            problems.append(f"unsupported vector backend '{self.vector_backend}'")
        elif self.vector_backend == "pinecone":
            if not self.pinecone_api_key:
                problems.append("PINECONE_API_KEY is required for the pinecone backend")
            if not self.pinecone_index:
                problems.append("PINECONE_INDEX must not be empty")

        if self.top_k < 1:
            problems.append("TM_TOP_K must be at least 1")
        if self.request_timeout <= 0:
            problems.append("TM_REQUEST_TIMEOUT must be positive")
        return problems

    def describe(self) -> Dict[str, object]:
        """Settings safe to print (credentials reduced to set/unset)"""
        return {
            "embedding_provider": self.embedding_provider,
            "embedding_model": self.embedding_model,
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "vector_backend": self.vector_backend,
            "pinecone_index": self.pinecone_index,
            "pinecone_host": self.pinecone_host,
            "top_k": self.top_k,
            "request_timeout": self.request_timeout,
            "log_level": self.log_level,
            "google_api_key": "set" if self.google_api_key else "unset",
            "openai_api_key": "set" if self.openai_api_key else "unset",
            "pinecone_api_key": "set" if self.pinecone_api_key else "unset",
        }
