from .base import Embedding, EmbeddingsClient
from .config import EmbeddingsConfig
from .factory import create_embeddings_client

__all__ = [
    "Embedding",
    "EmbeddingsClient",
    "EmbeddingsConfig",
    "create_embeddings_client",
]
