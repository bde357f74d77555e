"""Embedding capability interfaces, similarity math and pooling."""

from slabs.embedding.base import BatchEmbedder, Embedder, as_embedding_matrix
from slabs.embedding.late_pooling import LateChunkingPooler
from slabs.embedding.mock import MockEmbedder
from slabs.embedding.similarity import adjacent_similarities, cosine_similarity

__all__ = [
    "BatchEmbedder",
    "Embedder",
    "LateChunkingPooler",
    "MockEmbedder",
    "adjacent_similarities",
    "as_embedding_matrix",
    "cosine_similarity",
]
