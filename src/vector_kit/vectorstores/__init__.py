from .base import VectorStore
from .config import StoreConfig
from .memoryvectorstore import InMemoryVectorStore
from .method import MethodKind, SearchMethod
from .types import QueryResult, SearchResponse, VectorItem

__all__ = [
    "InMemoryVectorStore",
    "MethodKind",
    "QueryResult",
    "SearchMethod",
    "SearchResponse",
    "StoreConfig",
    "VectorItem",
    "VectorStore",
]
