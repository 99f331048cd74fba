import asyncio
import logging
from time import monotonic
from typing import Any

from openai import AsyncOpenAI, OpenAIError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from vector_kit.errors import InternalError
from vector_kit.observability import names
from vector_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Embedding, EmbeddingsClient

logger = logging.getLogger(__name__)


class OpenAIEmbeddingsClient(EmbeddingsClient):
    def __init__(
        self,
        api_key: str | None = None,
        model: str = "text-embedding-3-small",
        timeout: float = 10,
        batch_size: int = 100,
        dimensions: int | None = None,
        max_attempts: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        # api_key=None lets the SDK read OPENAI_API_KEY
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model = model
        self._batch_size = batch_size
        self._dimensions = dimensions
        self._max_attempts = max_attempts
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized OpenAIEmbeddingsClient with model=%s, timeout=%s, batch_size=%s, dimensions=%s",
            model,
            timeout,
            batch_size,
            dimensions,
        )

    async def embed(self, texts: list[str]) -> list[Embedding]:
        if not texts:
            logger.debug("Empty input, returning empty list")
            return []

        start = monotonic()
        logger.info("Embedding %d texts in batches of %d", len(texts), self._batch_size)

        batches = [
            texts[batch_start : batch_start + self._batch_size]
            for batch_start in range(0, len(texts), self._batch_size)
        ]

        logger.debug("Processing %d batches concurrently", len(batches))
        try:
            responses = await asyncio.gather(
                *[self._embed_batch(batch) for batch in batches]
            )
        except OpenAIError:
            self.metrics_hook.increment(
                names.EMBEDDINGS_ERRORS_TOTAL, labels={"backend": "openai"}
            )
            raise

        embeddings: list[Embedding] = []
        for batch, response in zip(batches, responses):
            if len(response.data) != len(batch):
                raise InternalError(
                    f"OpenAI returned {len(response.data)} embeddings for {len(batch)} texts"
                )
            # The API tags each vector with its input position
            ordered = sorted(response.data, key=lambda data: data.index)
            embeddings.extend(Embedding(vector=list(data.embedding)) for data in ordered)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.EMBEDDINGS_DURATION, elapsed_ms, labels={"backend": "openai"}
        )
        self.metrics_hook.increment(
            names.EMBEDDINGS_REQUESTS_TOTAL, labels={"backend": "openai"}
        )
        self.metrics_hook.record_gauge(names.EMBEDDINGS_BATCH_SIZE, len(texts))
        logger.info("Successfully embedded %d texts", len(embeddings))
        return embeddings

    async def _embed_batch(self, batch: list[str]) -> Any:
        kwargs: dict[str, Any] = {"model": self._model, "input": batch}
        if self._dimensions is not None:
            kwargs["dimensions"] = self._dimensions

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type(OpenAIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.embeddings.create(**kwargs)
