import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from vector_kit.similarity import Metric


@dataclass(frozen=True)
class VectorItem:
    id: str
    vector: list[float]
    metadata: Mapping[str, Any]


@dataclass(frozen=True)
class QueryResult:
    id: str
    score: float
    metadata: Mapping[str, Any]


@dataclass(frozen=True)
class SearchResponse:
    """Ranked results of one k-NN query.

    ``method`` is the label the caller asked for, echoed verbatim even when
    it was not recognized. ``effective_method`` is the metric whose ranking
    semantics were actually applied. ``total`` is the number of records
    scanned.
    """

    results: list[QueryResult]
    method: str
    effective_method: Metric
    total: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the response body served by the HTTP layer.

        Similarity metrics report each score as ``similarity``; euclidean
        (and the unrecognized-method fallback) report it as ``distance``.
        Non-finite scores (NaN from a zero-norm cosine, or an overflowed
        infinity) become ``None`` so the body stays valid JSON.
        """
        score_key = (
            "similarity" if self.effective_method.higher_is_better else "distance"
        )
        return {
            "results": [
                {
                    "id": result.id,
                    score_key: result.score if math.isfinite(result.score) else None,
                    "metadata": dict(result.metadata),
                }
                for result in self.results
            ],
            "method": self.method,
            "total": self.total,
        }
