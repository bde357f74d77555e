"""Tests for the late chunking pooler."""

import numpy as np
import pytest

from slabs.domain.entities.slab import Slab
from slabs.embedding.late_pooling import LateChunkingPooler


@pytest.fixture()
def token_embeddings() -> np.ndarray:
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
            [1.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 1.0],
        ]
    )


def halves(length: int) -> list[Slab]:
    document = "x" * length
    middle = length // 2
    return [
        Slab.from_document(document, 0, middle, index=0),
        Slab.from_document(document, middle, length, index=1),
    ]


class TestPool:
    """Tests for linear offset mapping."""

    def test_pool_basic(self, token_embeddings: np.ndarray) -> None:
        # Arrange
        pooler = LateChunkingPooler(4)

        # Act
        pooled = pooler.pool(token_embeddings, halves(20), doc_len=20)

        # Assert
        assert pooled.shape == (2, 4)
        np.testing.assert_allclose(pooled[0], np.array([1.0, 1.0, 1.0, 0.0]) / np.sqrt(3), rtol=1e-6)
        np.testing.assert_allclose(pooled[1], np.array([1.0, 1.0, 1.0, 2.0]) / np.sqrt(7), rtol=1e-6)

    def test_rows_are_unit_length(self, token_embeddings: np.ndarray) -> None:
        pooled = LateChunkingPooler(4).pool(token_embeddings, halves(20), doc_len=20)

        np.testing.assert_allclose(np.linalg.norm(pooled, axis=1), [1.0, 1.0], rtol=1e-6)

    def test_no_tokens_gives_zeros(self) -> None:
        pooled = LateChunkingPooler(4).pool([], halves(20), doc_len=20)

        np.testing.assert_array_equal(pooled, np.zeros((2, 4)))

    def test_empty_document_gives_zeros(self, token_embeddings: np.ndarray) -> None:
        pooled = LateChunkingPooler(4).pool(token_embeddings, halves(20), doc_len=0)

        assert not pooled.any()

    def test_slab_without_tokens_uses_document_mean(self) -> None:
        # Arrange
        tokens = np.array([[1.0, 0.0], [0.0, 1.0]])
        document = "x" * 100
        slabs = [Slab.from_document(document, 0, 10)]

        # Act
        pooled = LateChunkingPooler(2).pool(tokens, slabs, doc_len=100)

        # Assert
        np.testing.assert_allclose(pooled[0], np.array([1.0, 1.0]) / np.sqrt(2), rtol=1e-6)

    def test_no_slabs(self, token_embeddings: np.ndarray) -> None:
        assert LateChunkingPooler(4).pool(token_embeddings, [], doc_len=20).shape == (0, 4)


class TestPoolWithOffsets:
    """Tests for exact token offsets."""

    def test_tokens_straddling_boundary_count_for_both(self) -> None:
        # Arrange
        tokens = np.eye(3)
        offsets = [(0, 5), (5, 10), (10, 15)]
        document = "x" * 20
        slabs = [
            Slab.from_document(document, 0, 8, index=0),
            Slab.from_document(document, 8, 15, index=1),
            Slab.from_document(document, 15, 20, index=2),
        ]

        # Act
        pooled = LateChunkingPooler(3).pool_with_offsets(tokens, offsets, slabs)

        # Assert
        np.testing.assert_allclose(pooled[0], np.array([1.0, 1.0, 0.0]) / np.sqrt(2), rtol=1e-6)
        np.testing.assert_allclose(pooled[1], np.array([0.0, 1.0, 1.0]) / np.sqrt(2), rtol=1e-6)
        np.testing.assert_allclose(pooled[2], np.array([1.0, 1.0, 1.0]) / np.sqrt(3), rtol=1e-6)

    def test_no_tokens_gives_zeros(self) -> None:
        pooled = LateChunkingPooler(3).pool_with_offsets([], [], halves(10))

        np.testing.assert_array_equal(pooled, np.zeros((2, 3)))


class TestValidation:
    """Tests for invalid pooler inputs."""

    def test_invalid_dimension(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            LateChunkingPooler(0)

    def test_token_embeddings_must_be_a_matrix(self) -> None:
        with pytest.raises(ValueError, match="2-dimensional"):
            LateChunkingPooler(3).pool([1.0, 2.0, 3.0], halves(10), doc_len=10)
