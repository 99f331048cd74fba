"""Text-in, ranked-results-out search on top of an embeddings client and a store."""

import logging
from collections.abc import Mapping, Sequence
from time import monotonic
from typing import Any

from vector_kit.embeddings.base import EmbeddingsClient
from vector_kit.errors import InternalError, InvalidArgumentError
from vector_kit.observability import names
from vector_kit.observability.base import MetricsHook, NoOpMetricsHook
from vector_kit.vectorstores.base import VectorStore
from vector_kit.vectorstores.types import SearchResponse, VectorItem

logger = logging.getLogger(__name__)

TEXT_METADATA_KEY = "text"


class TextSearchService:
    """Embeds texts with an EmbeddingsClient and ranks them with a VectorStore.

    Example:
        >>> service = TextSearchService(embeddings=client, store=InMemoryVectorStore())
        >>> await service.add_texts(["1"], ["Software engineer"], [{"career": "swe"}])
        >>> response = await service.search_text("writing code", k=1, method="cosine")
    """

    def __init__(
        self,
        *,
        embeddings: EmbeddingsClient,
        store: VectorStore,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._embeddings = embeddings
        self._store = store
        self.metrics_hook = metrics_hook

    async def add_texts(
        self,
        ids: Sequence[str],
        texts: Sequence[str],
        metadatas: Sequence[Mapping[str, Any]] | None = None,
    ) -> int:
        """
        Embed ``texts`` and insert one record per text.

        The text is kept in each record's metadata under ``"text"`` unless
        the caller's metadata already sets that key.

        Returns:
            Number of records inserted.
        """
        if len(ids) != len(texts):
            raise InvalidArgumentError("ids and texts must have the same length")
        if metadatas is not None and len(metadatas) != len(texts):
            raise InvalidArgumentError("metadatas and texts must have the same length")
        if not texts:
            return 0

        start = monotonic()
        embeddings = await self._embeddings.embed(list(texts))
        if len(embeddings) != len(texts):
            raise InternalError(
                f"Embeddings client returned {len(embeddings)} vectors for {len(texts)} texts"
            )

        items = []
        for i, (item_id, text, embedding) in enumerate(zip(ids, texts, embeddings)):
            metadata = dict(metadatas[i]) if metadatas is not None else {}
            metadata.setdefault(TEXT_METADATA_KEY, text)
            items.append(VectorItem(id=item_id, vector=embedding.vector, metadata=metadata))

        inserted = self._store.insert_many(items)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.TEXT_SEARCH_INDEX_DURATION, elapsed_ms)
        logger.info("Indexed %d texts", inserted)
        return inserted

    async def search_text(
        self,
        query: str,
        k: int | None = None,
        method: str | None = None,
    ) -> SearchResponse:
        """Embed ``query`` and return the store's ranked response for it."""
        if not query or not query.strip():
            raise InvalidArgumentError("query must be a non-empty string")

        start = monotonic()
        embeddings = await self._embeddings.embed([query])
        if len(embeddings) != 1:
            raise InternalError(
                f"Embeddings client returned {len(embeddings)} vectors for 1 query"
            )

        response = self._store.search(embeddings[0].vector, k=k, method=method)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.TEXT_SEARCH_QUERY_DURATION, elapsed_ms)
        logger.debug(
            "Text search returned %d of %d records", len(response.results), response.total
        )
        return response
