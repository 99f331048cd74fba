"""In-memory vector store answering k-NN queries by exhaustive scan."""

import logging
import math
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from numbers import Integral, Real
from time import monotonic
from typing import Any

from vector_kit.errors import InternalError, InvalidArgumentError
from vector_kit.observability import names
from vector_kit.observability.base import MetricsHook, NoOpMetricsHook
from vector_kit.similarity import METRIC_FUNCTIONS, Metric

from .base import VectorStore
from .config import StoreConfig
from .method import SearchMethod
from .types import QueryResult, SearchResponse, VectorItem

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorStore):
    """Append-only store of (id, embedding, metadata) records.

    Every search scores the query against every stored record; there is no
    secondary index. Ids are not deduplicated: inserting the same id twice
    yields two independent records.

    Thread-safe. Inserts append under a lock; searches take a snapshot of the
    record list under the same lock and score it without holding it, so a
    search sees exactly the inserts that completed before it started.

    Example:
        >>> store = InMemoryVectorStore()
        >>> store.insert("a", [0.1, 0.2, 0.3], {"kind": "doc"})
        >>> response = store.search([0.1, 0.2, 0.3], k=1, method="cosine")
        >>> response.results[0].id
        'a'
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or StoreConfig()
        self.metrics_hook = metrics_hook
        self._records: list[VectorItem] = []
        self._lock = threading.Lock()

    def insert(
        self,
        id: str,
        embedding: Sequence[float],
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Append one record.

        Args:
            id: Caller-supplied identifier. Must be a non-empty string.
            embedding: Non-empty sequence of finite real numbers.
            metadata: Opaque mapping returned with search results. The store
                keeps a shallow copy, so later changes to the caller's dict
                do not reach the stored record.

        Raises:
            InvalidArgumentError: If id, embedding or metadata is missing or malformed.
        """
        self._append([self._make_item(id, embedding, metadata)], monotonic())

    def insert_many(self, items: Iterable[VectorItem]) -> int:
        """
        Append a batch of records.

        The whole batch is validated before anything is appended, so an
        invalid item leaves the store unchanged.

        Returns:
            Number of records appended.
        """
        start = monotonic()
        validated = [
            self._make_item(item.id, item.vector, item.metadata) for item in items
        ]
        if not validated:
            return 0
        return self._append(validated, start)

    def _append(self, validated: list[VectorItem], start: float) -> int:
        with self._lock:
            self._records.extend(validated)
            size = len(self._records)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.STORE_INSERT_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.STORE_OPERATIONS_TOTAL,
            value=len(validated),
            labels={"operation": "insert"},
        )
        self.metrics_hook.record_gauge(names.STORE_RECORDS, size)
        logger.debug("Inserted %d records, store size is now %d", len(validated), size)
        return len(validated)

    def search(
        self,
        embedding: Sequence[float] | None,
        k: int | None = None,
        method: str | None = None,
    ) -> SearchResponse:
        """
        Rank every stored record against ``embedding`` and return the top k.

        Args:
            embedding: Query vector. Required.
            k: Number of results. ``None`` or a non-positive integer falls back
                to ``config.default_k``. Non-integers are rejected. Larger than the store returns all.
            method: "cosine", "dotproduct" or "euclidean". ``None`` uses
                ``config.default_method``. Any other label ranks like
                "euclidean" but is echoed back unchanged in the response.

        Returns:
            SearchResponse with results ordered best first. Ties keep
            insertion order; NaN scores come after every finite score.

        Raises:
            InvalidArgumentError: If the query is missing or malformed, or a
                record's dimensionality differs under the "error" policy.
            InternalError: If a metric that must be finite yields NaN.
        """
        start = monotonic()
        try:
            response = self._search(embedding, k, method)
        except (InvalidArgumentError, InternalError) as exc:
            self.metrics_hook.increment(
                names.STORE_ERRORS_TOTAL,
                labels={"operation": "search", "error": type(exc).__name__},
            )
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.STORE_SEARCH_DURATION,
            elapsed_ms,
            labels={"method": response.effective_method.value},
        )
        self.metrics_hook.increment(
            names.STORE_OPERATIONS_TOTAL, labels={"operation": "search"}
        )
        self.metrics_hook.record_gauge(names.STORE_SCANNED_RECORDS, response.total)
        return response

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def _search(
        self,
        embedding: Sequence[float] | None,
        k: int | None,
        method: str | None,
    ) -> SearchResponse:
        if embedding is None:
            raise InvalidArgumentError("embedding is required")
        query = self._validate_vector(embedding, "embedding")

        if k is not None and (not isinstance(k, Integral) or isinstance(k, bool)):
            raise InvalidArgumentError("k must be an integer")
        top_k = int(k) if k is not None and k > 0 else self.config.default_k
        resolved = SearchMethod.parse(
            method if method is not None else self.config.default_method
        )
        metric = resolved.metric
        if not resolved.recognized:
            logger.debug(
                "Unrecognized search method %r, ranking as %s",
                resolved.label,
                metric.value,
            )

        with self._lock:
            snapshot = list(self._records)

        scored = self._score(snapshot, query, metric)
        ranked = sorted(scored, key=_ranking_key(metric))[:top_k]

        logger.debug(
            "Search scanned %d records with method=%s, returning %d",
            len(snapshot),
            resolved.label,
            len(ranked),
        )
        return SearchResponse(
            results=ranked,
            method=resolved.label,
            effective_method=metric,
            total=len(snapshot),
        )

    def _score(
        self, records: list[VectorItem], query: list[float], metric: Metric
    ) -> list[QueryResult]:
        score_fn = METRIC_FUNCTIONS[metric]
        results: list[QueryResult] = []
        skipped = 0

        for record in records:
            if len(record.vector) != len(query):
                if self.config.mismatch_policy == "error":
                    raise InvalidArgumentError(
                        f"Query has {len(query)} dimensions but record "
                        f"{record.id!r} has {len(record.vector)}"
                    )
                skipped += 1
                continue

            score = score_fn(query, record.vector)
            if math.isnan(score) and metric is not Metric.COSINE:
                raise InternalError(
                    f"{metric.value} produced NaN for record {record.id!r}"
                )
            results.append(
                QueryResult(id=record.id, score=score, metadata=record.metadata)
            )

        if skipped:
            logger.warning(
                "Skipped %d records whose dimensionality differs from the query (%d)",
                skipped,
                len(query),
            )
            self.metrics_hook.increment(names.STORE_SKIPPED_RECORDS_TOTAL, skipped)
        return results

    def _make_item(
        self,
        id: str,
        embedding: Sequence[float] | None,
        metadata: Mapping[str, Any] | None,
    ) -> VectorItem:
        if not isinstance(id, str) or not id:
            raise InvalidArgumentError("id must be a non-empty string")
        if embedding is None:
            raise InvalidArgumentError("embedding is required")
        if metadata is not None and not isinstance(metadata, Mapping):
            raise InvalidArgumentError("metadata must be a mapping")
        return VectorItem(
            id=id,
            vector=self._validate_vector(embedding, "embedding"),
            # Shallow copy; nested values are still shared with the caller
            metadata=dict(metadata) if metadata is not None else {},
        )

    @staticmethod
    def _validate_vector(values: Sequence[float], name: str) -> list[float]:
        """Copy ``values`` into a fresh list of floats, rejecting bad input."""
        if isinstance(values, (str, bytes)):
            raise InvalidArgumentError(f"{name} must be a sequence of numbers")
        try:
            vector = list(values)
        except TypeError:
            raise InvalidArgumentError(
                f"{name} must be a sequence of numbers"
            ) from None
        if not vector:
            raise InvalidArgumentError(f"{name} must not be empty")
        if not all(isinstance(v, Real) and not isinstance(v, bool) for v in vector):
            raise InvalidArgumentError(f"{name} must contain only real numbers")
        floats = [float(v) for v in vector]
        if not all(math.isfinite(v) for v in floats):
            raise InvalidArgumentError(f"{name} must contain only finite values")
        return floats


def _ranking_key(metric: Metric) -> Callable[[QueryResult], tuple[int, float]]:
    """Sort key placing NaN last and best scores first.

    Relies on ``sorted`` being stable so equal scores keep insertion order.
    """
    sign = -1.0 if metric.higher_is_better else 1.0

    def key(result: QueryResult) -> tuple[int, float]:
        if math.isnan(result.score):
            return (1, 0.0)
        return (0, sign * result.score)

    return key
