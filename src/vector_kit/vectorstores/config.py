# src/vector_kit/vectorstores/config.py

import os
from dataclasses import dataclass
from typing import Literal, get_args

MismatchPolicy = Literal["skip", "error"]

DEFAULT_TOP_K = 5
DEFAULT_METHOD = "euclidean"


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for the in-memory vector store.

    Immutable. Explicit. Use ``from_env`` to opt into environment overrides.

    mismatch_policy decides what happens when a stored record's
    dimensionality differs from the query's: "skip" leaves the record out of
    the ranking, "error" fails the whole search.
    """

    default_k: int = DEFAULT_TOP_K
    default_method: str = DEFAULT_METHOD
    mismatch_policy: MismatchPolicy = "skip"

    def __post_init__(self) -> None:
        if self.default_k < 1:
            raise ValueError("default_k must be at least 1")
        if not self.default_method:
            raise ValueError("default_method must be a non-empty string")
        if self.mismatch_policy not in get_args(MismatchPolicy):
            raise ValueError(f"Unknown mismatch policy: {self.mismatch_policy}")

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build a config from VECTOR_KIT_* environment variables."""
        return cls(
            default_k=int(os.environ.get("VECTOR_KIT_DEFAULT_K", DEFAULT_TOP_K)),
            default_method=os.environ.get("VECTOR_KIT_DEFAULT_METHOD", DEFAULT_METHOD),
            mismatch_policy=os.environ.get(  # type: ignore[arg-type]
                "VECTOR_KIT_MISMATCH_POLICY", "skip"
            ),
        )
