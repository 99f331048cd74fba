# src/vector_kit/embeddings/config.py

import os
from dataclasses import dataclass
from typing import Literal

Provider = Literal["openai", "local"]


@dataclass(frozen=True)
class EmbeddingsConfig:
    provider: Provider
    model: str
    timeout: float = 30.0
    batch_size: int = 100

    # provider-specific (used only when relevant)
    api_key: str | None = None  # openai: falls back to OPENAI_API_KEY
    dimensions: int | None = None  # openai: shorten vectors server-side
    normalize: bool = False  # local: L2-normalize so dotproduct == cosine

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.dimensions is not None and self.dimensions < 1:
            raise ValueError("dimensions must be at least 1")

    @classmethod
    def from_env(cls) -> "EmbeddingsConfig":
        """Build a config from VECTOR_KIT_EMBEDDINGS_* environment variables."""
        dimensions = os.environ.get("VECTOR_KIT_EMBEDDINGS_DIMENSIONS")
        return cls(
            provider=os.environ.get(  # type: ignore[arg-type]
                "VECTOR_KIT_EMBEDDINGS_PROVIDER", "openai"
            ),
            model=os.environ.get(
                "VECTOR_KIT_EMBEDDINGS_MODEL", "text-embedding-3-small"
            ),
            timeout=float(os.environ.get("VECTOR_KIT_EMBEDDINGS_TIMEOUT", 30.0)),
            batch_size=int(os.environ.get("VECTOR_KIT_EMBEDDINGS_BATCH_SIZE", 100)),
            dimensions=int(dimensions) if dimensions else None,
        )
