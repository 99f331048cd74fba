from dataclasses import dataclass
from typing import Protocol

from vector_kit.observability.base import MetricsHook


@dataclass(frozen=True)
class Embedding:
    vector: list[float]

    @property
    def dimensions(self) -> int:
        return len(self.vector)


class EmbeddingsClient(Protocol):
    """Turns text into vectors. One Embedding per input text, same order."""

    metrics_hook: MetricsHook

    async def embed(self, texts: list[str]) -> list[Embedding]: ...
