"""Tests for UnifiedChunkingFactory."""

from unittest.mock import patch

import pytest

from slabs.config import settings
from slabs.domain.exceptions import InvalidConfigurationError, StrategyNotFoundError
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.embedding.mock import MockEmbedder
from slabs.unified.boundary_strategy import BoundaryChunkingStrategy
from slabs.unified.factory import ChunkingStrategyType, UnifiedChunkingFactory
from slabs.unified.fixed_strategy import FixedChunkingStrategy
from slabs.unified.recursive_strategy import RecursiveChunkingStrategy
from slabs.unified.semantic_strategy import SemanticChunkingStrategy
from slabs.unified.sentence_strategy import SentenceChunkingStrategy


class EveryTenCharacters:
    def predict_splits(self, text: str) -> list[int]:
        return list(range(10, len(text), 10))


class TestCreateStrategy:
    """Test suite for strategy creation."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("fixed", FixedChunkingStrategy),
            ("sentence", SentenceChunkingStrategy),
            ("recursive", RecursiveChunkingStrategy),
            ("character", FixedChunkingStrategy),
            ("markdown", RecursiveChunkingStrategy),
            (ChunkingStrategyType.FIXED, FixedChunkingStrategy),
            ("  Recursive ", RecursiveChunkingStrategy),
        ],
    )
    def test_creates_expected_type(self, name, expected) -> None:
        strategy = UnifiedChunkingFactory.create_strategy(name)

        assert isinstance(strategy, expected)

    def test_unknown_strategy(self) -> None:
        with pytest.raises(StrategyNotFoundError, match="'hybrid' not found") as exc_info:
            UnifiedChunkingFactory.create_strategy("hybrid")

        assert exc_info.value.strategy_name == "hybrid"
        assert isinstance(exc_info.value, ValueError)

    def test_sentence_options_forwarded(self) -> None:
        strategy = UnifiedChunkingFactory.create_strategy("sentence", max_sentences=3)

        assert strategy.max_sentences == 3

    def test_markdown_alias_uses_heading_separators(self) -> None:
        strategy = UnifiedChunkingFactory.create_strategy("markdown")

        slabs = strategy.chunk("Intro.\n## One\nBody.\n## Two\nBody.", ChunkConfig(target_size=16))

        assert [s.text for s in slabs] == ["Intro.", "\n## One\nBody.", "\n## Two\nBody."]

    def test_recursive_custom_separators(self) -> None:
        strategy = UnifiedChunkingFactory.create_strategy("recursive", separators=["|"])

        slabs = strategy.chunk("a|b|c", ChunkConfig(target_size=2))

        assert [s.text for s in slabs] == ["a|", "b|", "c"]

    def test_semantic_with_embedder(self, topic_embedder) -> None:
        strategy = UnifiedChunkingFactory.create_strategy(
            ChunkingStrategyType.SEMANTIC, embedder=topic_embedder, min_sentences=2, batch_size=8
        )

        assert isinstance(strategy, SemanticChunkingStrategy)
        assert strategy.embedder is topic_embedder
        assert strategy.min_sentences == 2
        assert strategy.batch_size == 8

    def test_semantic_without_embedder_rejected(self) -> None:
        with patch.object(settings, "USE_MOCK_EMBEDDINGS", False), pytest.raises(
            InvalidConfigurationError, match="requires an embedder"
        ):
            UnifiedChunkingFactory.create_strategy("semantic")

    def test_semantic_falls_back_to_mock_embeddings(self) -> None:
        with patch.object(settings, "USE_MOCK_EMBEDDINGS", True), patch.object(settings, "MOCK_EMBEDDING_DIM", 16):
            strategy = UnifiedChunkingFactory.create_strategy("semantic")

        assert isinstance(strategy.embedder, MockEmbedder)
        assert strategy.embedder.dimension == 16

    def test_boundary_with_predictor(self) -> None:
        strategy = UnifiedChunkingFactory.create_strategy("model", predictor=EveryTenCharacters())

        slabs = strategy.chunk("x" * 25, ChunkConfig(target_size=10))

        assert isinstance(strategy, BoundaryChunkingStrategy)
        assert [len(s) for s in slabs] == [10, 10, 5]

    def test_boundary_without_predictor_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="requires a predictor"):
            UnifiedChunkingFactory.create_strategy("boundary")


class TestFactoryHelpers:
    """Test suite for lookup helpers."""

    def test_available_strategies(self) -> None:
        assert UnifiedChunkingFactory.get_available_strategies() == [
            "fixed",
            "sentence",
            "recursive",
            "semantic",
            "boundary",
        ]

    def test_resolve_type(self) -> None:
        assert UnifiedChunkingFactory.resolve_type("CHARACTER") is ChunkingStrategyType.FIXED
        assert UnifiedChunkingFactory.resolve_type(ChunkingStrategyType.SEMANTIC) is ChunkingStrategyType.SEMANTIC

    def test_create_from_config(self) -> None:
        strategy = UnifiedChunkingFactory.create_from_config({"strategy": "sentence", "max_sentences": 2})

        assert isinstance(strategy, SentenceChunkingStrategy)
        assert strategy.max_sentences == 2

    def test_create_from_config_does_not_mutate_input(self) -> None:
        config = {"strategy": "fixed"}

        UnifiedChunkingFactory.create_from_config(config)

        assert config == {"strategy": "fixed"}

    def test_create_from_config_requires_strategy(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="'strategy'"):
            UnifiedChunkingFactory.create_from_config({"max_sentences": 2})
