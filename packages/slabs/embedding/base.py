"""Embedding capability consumed by the semantic strategy.

The engine never loads a model itself. Anything with an ``embed`` method can be
injected; objects that also provide ``embed_batch`` are called once per batch
instead of once per sentence. Either method may be a coroutine function.
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from slabs.domain.exceptions import DimensionMismatchError, EmbedderFailureError

logger = logging.getLogger(__name__)

Vector = Sequence[float] | NDArray[np.floating[Any]]


@runtime_checkable
class Embedder(Protocol):
    """Protocol for a text -> fixed-length vector capability."""

    def embed(self, text: str) -> Vector:
        """Return the embedding of a single sentence."""
        ...


@runtime_checkable
class BatchEmbedder(Embedder, Protocol):
    """Embedder that can also embed an ordered batch in one call."""

    def embed_batch(self, texts: list[str]) -> Sequence[Vector] | NDArray[np.floating[Any]]:
        """Return one vector per input text, in input order."""
        ...


def as_embedding_matrix(vectors: Sequence[Vector] | NDArray[Any], expected_count: int) -> NDArray[np.float64]:
    """
    Stack embedder output into a 2-D float matrix and check it is usable.

    Args:
        vectors: Vectors returned by the capability
        expected_count: Number of sentences that were embedded

    Returns:
        Array of shape ``(expected_count, dim)``

    Raises:
        EmbedderFailureError: On a wrong vector count, empty or non-numeric vectors, or non-finite values
        DimensionMismatchError: If vectors have different lengths
    """
    rows = list(vectors)
    if len(rows) != expected_count:
        raise EmbedderFailureError(
            f"Embedder returned {len(rows)} vectors for {expected_count} sentences",
            {"expected": expected_count, "actual": len(rows)},
        )

    if not rows:
        return np.zeros((0, 0), dtype=np.float64)

    try:
        arrays = [np.asarray(row, dtype=np.float64).ravel() for row in rows]
    except (TypeError, ValueError) as e:
        raise EmbedderFailureError(f"Embedder returned a non-numeric vector: {e}") from e

    dimension = arrays[0].shape[0]
    if dimension == 0:
        raise EmbedderFailureError("Embedder returned an empty vector", {"position": 0})

    for position, array in enumerate(arrays):
        if array.shape[0] != dimension:
            raise DimensionMismatchError(expected=dimension, actual=array.shape[0], position=position)

    matrix = np.vstack(arrays)
    if not np.all(np.isfinite(matrix)):
        bad_rows = np.where(~np.isfinite(matrix).all(axis=1))[0]
        raise EmbedderFailureError(
            f"Embedder returned non-finite values for {len(bad_rows)} sentence(s)",
            {"positions": bad_rows.tolist()},
        )

    logger.debug(f"Collected {expected_count} embeddings of dimension {dimension}")
    return matrix
