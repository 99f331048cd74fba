# src/vector_kit/errors.py


class VectorKitError(Exception):
    """Base class for all vector-kit errors."""


class InvalidArgumentError(VectorKitError, ValueError):
    """Missing or malformed input: absent embedding, empty id, length mismatch."""


class InternalError(VectorKitError, RuntimeError):
    """Unexpected numeric failure, e.g. NaN where a concrete value is required."""
