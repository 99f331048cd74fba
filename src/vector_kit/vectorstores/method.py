from dataclasses import dataclass
from enum import Enum

from vector_kit.similarity import Metric


class MethodKind(Enum):
    COSINE = "cosine"
    DOT_PRODUCT = "dotproduct"
    EUCLIDEAN = "euclidean"
    UNRECOGNIZED = "unrecognized"


_RANKING_METRIC = {
    MethodKind.COSINE: Metric.COSINE,
    MethodKind.DOT_PRODUCT: Metric.DOT_PRODUCT,
    MethodKind.EUCLIDEAN: Metric.EUCLIDEAN,
    # Unknown labels rank like euclidean; callers rely on this fallback.
    MethodKind.UNRECOGNIZED: Metric.EUCLIDEAN,
}


@dataclass(frozen=True)
class SearchMethod:
    kind: MethodKind
    label: str

    @classmethod
    def parse(cls, label: str) -> "SearchMethod":
        """Resolve a caller-supplied method label. Never fails.

        Matching is exact: "Cosine" is unrecognized, like any other label
        outside {"cosine", "dotproduct", "euclidean"}.
        """
        for kind in MethodKind:
            if kind is not MethodKind.UNRECOGNIZED and kind.value == label:
                return cls(kind=kind, label=label)
        return cls(kind=MethodKind.UNRECOGNIZED, label=label)

    @property
    def metric(self) -> Metric:
        return _RANKING_METRIC[self.kind]

    @property
    def recognized(self) -> bool:
        return self.kind is not MethodKind.UNRECOGNIZED
