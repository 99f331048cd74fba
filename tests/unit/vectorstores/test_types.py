# tests/unit/vectorstores/test_types.py

import json
import math

from vector_kit.similarity import Metric
from vector_kit.vectorstores import QueryResult, SearchResponse


def test_to_dict_similarity_methods_use_similarity_key() -> None:
    response = SearchResponse(
        results=[QueryResult(id="b", score=0.47, metadata={"career": "Data Scientist"})],
        method="dotproduct",
        effective_method=Metric.DOT_PRODUCT,
        total=3,
    )

    assert response.to_dict() == {
        "results": [
            {"id": "b", "similarity": 0.47, "metadata": {"career": "Data Scientist"}}
        ],
        "method": "dotproduct",
        "total": 3,
    }


def test_to_dict_fallback_uses_distance_key_and_echoes_label() -> None:
    response = SearchResponse(
        results=[QueryResult(id="a", score=0.2, metadata={})],
        method="invalid_method",
        effective_method=Metric.EUCLIDEAN,
        total=1,
    )

    body = response.to_dict()

    assert body["method"] == "invalid_method"
    assert body["results"] == [{"id": "a", "distance": 0.2, "metadata": {}}]


def test_to_dict_nan_becomes_none() -> None:
    response = SearchResponse(
        results=[QueryResult(id="zero", score=math.nan, metadata={})],
        method="cosine",
        effective_method=Metric.COSINE,
        total=1,
    )

    body = response.to_dict()

    assert body["results"][0]["similarity"] is None
    # Strict JSON rejects NaN
    json.dumps(body, allow_nan=False)


def test_to_dict_infinite_score_becomes_none() -> None:
    response = SearchResponse(
        results=[
            QueryResult(id="huge", score=math.inf, metadata={}),
            QueryResult(id="opposite", score=-math.inf, metadata={}),
        ],
        method="dotproduct",
        effective_method=Metric.DOT_PRODUCT,
        total=2,
    )

    body = response.to_dict()

    assert [r["similarity"] for r in body["results"]] == [None, None]
    json.dumps(body, allow_nan=False)
