"""Vector index backends and the gateway the pipeline talks to"""
from .backend_base import VectorIndexBackend
from .memory_backend import InMemoryIndexBackend
from .gateway import VectorStoreGateway, create_backend_factory, create_vector_gateway

__all__ = [
    'VectorIndexBackend',
    'InMemoryIndexBackend',
    'VectorStoreGateway',
    'create_backend_factory',
    'create_vector_gateway',
]
