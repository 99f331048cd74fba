# Embeddings
from .embeddings import (
    Embedding,
    EmbeddingsClient,
    EmbeddingsConfig,
    create_embeddings_client,
)

# Errors
from .errors import InternalError, InvalidArgumentError, VectorKitError

# Observability
from .observability import MetricsHook, NoOpMetricsHook, RecordingMetricsHook

# Text search
from .search import TextSearchService

# Similarity
from .similarity import (
    Metric,
    cosine_similarity,
    dot_product,
    euclidean_distance,
)

# Vector stores
from .vectorstores import (
    InMemoryVectorStore,
    QueryResult,
    SearchMethod,
    SearchResponse,
    StoreConfig,
    VectorItem,
    VectorStore,
)

__all__ = [
    # Embeddings
    "Embedding",
    "EmbeddingsClient",
    "EmbeddingsConfig",
    "create_embeddings_client",
    # Errors
    "InternalError",
    "InvalidArgumentError",
    "VectorKitError",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    "RecordingMetricsHook",
    # Text search
    "TextSearchService",
    # Similarity
    "Metric",
    "cosine_similarity",
    "dot_product",
    "euclidean_distance",
    # Vector stores
    "InMemoryVectorStore",
    "QueryResult",
    "SearchMethod",
    "SearchResponse",
    "StoreConfig",
    "VectorItem",
    "VectorStore",
]
