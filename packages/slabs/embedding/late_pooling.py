#!/usr/bin/env python3
"""
Late chunking: pool full-document token embeddings into per-slab vectors.

The document is embedded once by a long-context model, then each slab gets the
mean of the token vectors that fall inside it. Every slab vector therefore
carries context from the whole document rather than only its own text.
"""

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from slabs.domain.entities.slab import Slab

logger = logging.getLogger(__name__)

_NORM_EPSILON = 1e-9


class LateChunkingPooler:
    """Mean-pools token embeddings over slab spans."""

    def __init__(self, dim: int) -> None:
        if dim <= 0:
            raise ValueError(f"Embedding dimension must be positive, got {dim}")
        self.dim = dim

    def pool(self, token_embeddings: ArrayLike, slabs: Sequence[Slab], doc_len: int) -> NDArray[np.float32]:
        """
        Pool by mapping character offsets linearly onto token positions.

        Args:
            token_embeddings: Matrix of shape ``(n_tokens, dim)`` for the whole document
            slabs: Slabs produced from the same document
            doc_len: Document length in characters

        Returns:
            Matrix of shape ``(len(slabs), dim)``, one L2-normalised row per slab
        """
        tokens = self._as_matrix(token_embeddings)
        if tokens.shape[0] == 0 or not slabs or doc_len == 0:
            return np.zeros((len(slabs), self.dim), dtype=np.float32)

        n_tokens = tokens.shape[0]
        pooled = []
        for slab in slabs:
            token_start = int(slab.start / doc_len * n_tokens)
            token_end = min(int(slab.end / doc_len * n_tokens), n_tokens)

            # Slabs too short to own a token fall back to the document mean
            if token_end <= token_start:
                pooled.append(self._mean_pool(tokens))
            else:
                pooled.append(self._mean_pool(tokens[token_start:token_end]))

        return np.vstack(pooled)

    def pool_with_offsets(
        self,
        token_embeddings: ArrayLike,
        token_offsets: Sequence[tuple[int, int]],
        slabs: Sequence[Slab],
    ) -> NDArray[np.float32]:
        """
        Pool using the exact character span of every token.

        A token belongs to a slab when their spans intersect, so tokens that
        straddle a boundary count for both slabs.

        Args:
            token_embeddings: Matrix of shape ``(n_tokens, dim)``
            token_offsets: ``(start, end)`` character span of each token
            slabs: Slabs produced from the same document

        Returns:
            Matrix of shape ``(len(slabs), dim)``
        """
        tokens = self._as_matrix(token_embeddings)
        if tokens.shape[0] == 0 or not slabs:
            return np.zeros((len(slabs), self.dim), dtype=np.float32)

        offsets = np.asarray(token_offsets, dtype=np.int64).reshape(-1, 2)[: tokens.shape[0]]

        pooled = []
        for slab in slabs:
            mask = (offsets[:, 0] < slab.end) & (offsets[:, 1] > slab.start)
            if not mask.any():
                pooled.append(self._mean_pool(tokens))
            else:
                pooled.append(self._mean_pool(tokens[: offsets.shape[0]][mask]))

        return np.vstack(pooled)

    def _as_matrix(self, token_embeddings: ArrayLike) -> NDArray[Any]:
        tokens = np.asarray(token_embeddings, dtype=np.float32)
        if tokens.size == 0:
            return np.zeros((0, self.dim), dtype=np.float32)
        if tokens.ndim != 2:
            raise ValueError(f"Token embeddings must be 2-dimensional, got shape {tokens.shape}")
        return tokens

    def _mean_pool(self, embeddings: NDArray[Any]) -> NDArray[np.float32]:
        if embeddings.shape[0] == 0:
            return np.zeros(self.dim, dtype=np.float32)

        mean = embeddings.mean(axis=0)
        norm = np.linalg.norm(mean)
        if norm > _NORM_EPSILON:
            mean = mean / norm
        return mean.astype(np.float32)
