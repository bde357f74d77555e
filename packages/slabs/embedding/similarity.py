"""Cosine similarity helpers."""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when either vector has zero norm.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.shape != vb.shape:
        raise ValueError(f"Vectors have different dimensions: {va.shape[0]} != {vb.shape[0]}")

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def adjacent_similarities(embeddings: NDArray[Any]) -> NDArray[np.float64]:
    """
    Cosine similarity of every consecutive pair of rows.

    Args:
        embeddings: Matrix of shape ``(n, dim)``

    Returns:
        Array of length ``max(n - 1, 0)`` where item ``i`` compares rows ``i`` and ``i + 1``
    """
    matrix = np.asarray(embeddings, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] < 2:
        return np.zeros(0, dtype=np.float64)

    norms = np.linalg.norm(matrix, axis=1)
    dots = np.einsum("ij,ij->i", matrix[:-1], matrix[1:])
    denominators = norms[:-1] * norms[1:]

    similarities = np.zeros(matrix.shape[0] - 1, dtype=np.float64)
    nonzero = denominators > 0
    similarities[nonzero] = dots[nonzero] / denominators[nonzero]
    return similarities
