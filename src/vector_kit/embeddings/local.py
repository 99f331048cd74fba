"""Embeddings computed in-process with a sentence-transformers model."""

import asyncio
import logging
from time import monotonic

import numpy as np
from sentence_transformers import SentenceTransformer

from vector_kit.errors import InvalidArgumentError
from vector_kit.observability import names
from vector_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Embedding, EmbeddingsClient

logger = logging.getLogger(__name__)


class LocalEmbeddingsClient(EmbeddingsClient):
    """Sentence-transformers adapter producing vectors for the vector store.

    The model is loaded on first use, so constructing a client is cheap and
    never touches the disk or network. Encoding is CPU-bound and runs in a
    worker thread. With ``normalize=True`` every vector has unit length and
    "dotproduct" ranks exactly like "cosine".

    Example:
        >>> client = LocalEmbeddingsClient(model_name="all-MiniLM-L6-v2")
        >>> [embedding] = await client.embed(["Data scientist"])
        >>> store.insert("career2", embedding.vector)
    """

    def __init__(
        self,
        model_name: str,
        batch_size: int = 32,
        normalize: bool = False,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._model_name = model_name
        self._model: SentenceTransformer | None = None
        self._batch_size = batch_size
        self._normalize = normalize
        self.metrics_hook = metrics_hook

    def _get_model(self) -> SentenceTransformer:
        if self._model is None:
            logger.info(
                "Loading sentence-transformers model %s (normalize=%s)",
                self._model_name,
                self._normalize,
            )
            self._model = SentenceTransformer(self._model_name)
        return self._model

    @property
    def dimensions(self) -> int | None:
        """Length of the vectors this model produces, loading it if needed."""
        return self._get_model().get_sentence_embedding_dimension()

    async def embed(self, texts: list[str]) -> list[Embedding]:
        if not texts:
            return []
        if not all(isinstance(text, str) for text in texts):
            raise InvalidArgumentError("texts must all be strings")

        start = monotonic()
        try:
            vectors = await asyncio.to_thread(self._encode_all, texts)
        except Exception:
            self.metrics_hook.increment(
                names.EMBEDDINGS_ERRORS_TOTAL, labels={"backend": "local"}
            )
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.EMBEDDINGS_DURATION, elapsed_ms, labels={"backend": "local"}
        )
        self.metrics_hook.increment(
            names.EMBEDDINGS_REQUESTS_TOTAL, labels={"backend": "local"}
        )
        self.metrics_hook.record_gauge(names.EMBEDDINGS_BATCH_SIZE, len(texts))
        logger.debug("Embedded %d texts in %.1f ms", len(texts), elapsed_ms)
        return [Embedding(vector=vector) for vector in vectors]

    def _encode_all(self, texts: list[str]) -> list[list[float]]:
        model = self._get_model()
        vectors: list[list[float]] = []
        for offset in range(0, len(texts), self._batch_size):
            encoded = model.encode(
                texts[offset : offset + self._batch_size],
                convert_to_numpy=True,
                normalize_embeddings=self._normalize,
                show_progress_bar=False,
            )
            # float32 from the model; the store works in float64
            vectors.extend(np.asarray(encoded, dtype=np.float64).tolist())
        return vectors
