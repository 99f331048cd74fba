"""Similarity and distance functions between two equal-length vectors.

All functions accept any sequence of real numbers (or a 1-D numpy array)
and return a plain ``float``. They are pure: no state, no caching.
"""

from collections.abc import Callable, Mapping, Sequence
from enum import Enum

import numpy as np
import numpy.typing as npt

from .errors import InvalidArgumentError

VectorLike = Sequence[float] | npt.NDArray[np.floating]


class Metric(str, Enum):
    COSINE = "cosine"
    DOT_PRODUCT = "dotproduct"
    EUCLIDEAN = "euclidean"

    @property
    def higher_is_better(self) -> bool:
        """Similarities rank descending, distances ascending."""
        return self is not Metric.EUCLIDEAN


def _as_pair(
    a: VectorLike, b: VectorLike
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    arr_a = np.asarray(a, dtype=np.float64)
    arr_b = np.asarray(b, dtype=np.float64)
    if arr_a.ndim != 1 or arr_b.ndim != 1:
        raise InvalidArgumentError("Vectors must be one-dimensional")
    if arr_a.shape[0] != arr_b.shape[0]:
        raise InvalidArgumentError("Vectors must be the same length")
    return arr_a, arr_b


def dot_product(a: VectorLike, b: VectorLike) -> float:
    arr_a, arr_b = _as_pair(a, b)
    return float(np.dot(arr_a, arr_b))


def _unit_scaled(arr: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Divide by the largest magnitude so squaring cannot overflow or underflow.

    All-zero (and empty) vectors are returned unchanged.
    """
    peak = np.max(np.abs(arr)) if arr.size else 0.0
    return arr / peak if peak > 0 else arr


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine of the angle between ``a`` and ``b``.

    Returns NaN when either vector has zero norm. Callers decide how to rank
    such a score; this function does not special-case it. Each vector is
    rescaled first, which leaves the cosine unchanged but keeps values like
    1e200 or 1e-200 representable.
    """
    arr_a, arr_b = _as_pair(a, b)
    arr_a, arr_b = _unit_scaled(arr_a), _unit_scaled(arr_b)
    denominator = np.linalg.norm(arr_a) * np.linalg.norm(arr_b)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(np.dot(arr_a, arr_b)) / denominator)


def euclidean_distance(a: VectorLike, b: VectorLike) -> float:
    arr_a, arr_b = _as_pair(a, b)
    return float(np.linalg.norm(arr_a - arr_b))


METRIC_FUNCTIONS: Mapping[Metric, Callable[[VectorLike, VectorLike], float]] = {
    Metric.COSINE: cosine_similarity,
    Metric.DOT_PRODUCT: dot_product,
    Metric.EUCLIDEAN: euclidean_distance,
}
