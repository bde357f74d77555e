"""Mock embedder for testing.

This embedder generates deterministic embeddings based on text hash,
suitable for testing the semantic strategy without loading a model.
"""

import hashlib
import logging

import numpy as np
from numpy.typing import NDArray

from slabs.domain.exceptions import EmbedderFailureError

logger = logging.getLogger(__name__)


class MockEmbedder:
    """Deterministic embedder seeded from the SHA-256 of the text.

    Identical sentences always map to the same unit vector; different sentences
    map to near-orthogonal ones, so every adjacent pair scores close to zero.
    """

    def __init__(self, dimension: int = 384, normalize: bool = True) -> None:
        if dimension <= 0:
            raise EmbedderFailureError(f"Embedding dimension must be positive, got {dimension}")

        self.dimension = dimension
        self.normalize = normalize
        logger.info(f"Mock embedder initialized with dimension={self.dimension}")

    def embed(self, text: str) -> NDArray[np.float32]:
        """Generate a deterministic embedding for a single text.

        Args:
            text: Input text

        Returns:
            Deterministic embedding vector
        """
        text_hash = hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()

        # First 8 hex chars of the hash seed the generator
        seed = int(text_hash[:8], 16)
        rng = np.random.Generator(np.random.PCG64(seed))

        embedding = rng.standard_normal(self.dimension).astype(np.float32)

        if self.normalize:
            norm = np.linalg.norm(embedding)
            if norm > 0:
                embedding = embedding / norm

        return embedding

    def embed_batch(self, texts: list[str]) -> NDArray[np.float32]:
        """Generate deterministic embeddings for multiple texts, in order."""
        if not texts:
            return np.zeros((0, self.dimension), dtype=np.float32)
        return np.vstack([self.embed(text) for text in texts])
