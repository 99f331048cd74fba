from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from vector_kit.observability.base import MetricsHook

from .types import SearchResponse, VectorItem


class VectorStore(Protocol):
    metrics_hook: MetricsHook

    def insert(
        self,
        id: str,
        embedding: Sequence[float],
        metadata: Mapping[str, Any] | None = None,
    ) -> None: ...

    def insert_many(self, items: Iterable[VectorItem]) -> int:
        """
        Append a batch of records.
        Returns number of records appended.
        """
        ...

    def search(
        self,
        embedding: Sequence[float] | None,
        k: int | None = None,
        method: str | None = None,
    ) -> SearchResponse: ...

    def count(self) -> int: ...
