#!/usr/bin/env python3
"""
Factory for unified chunking strategies.

Maps strategy names to strategy instances and wires in the default
capabilities (sentence segmenter, mock embedder in test setups).
"""

import logging
from enum import Enum
from typing import Any

from slabs.config import settings
from slabs.domain.exceptions import InvalidConfigurationError, StrategyNotFoundError
from slabs.domain.services.separators import SeparatorHierarchy
from slabs.embedding.mock import MockEmbedder
from slabs.unified.base import SlabChunkingStrategy
from slabs.unified.boundary_strategy import BoundaryChunkingStrategy
from slabs.unified.fixed_strategy import FixedChunkingStrategy
from slabs.unified.recursive_strategy import RecursiveChunkingStrategy
from slabs.unified.semantic_strategy import SemanticChunkingStrategy
from slabs.unified.sentence_strategy import SentenceChunkingStrategy

logger = logging.getLogger(__name__)


class ChunkingStrategyType(str, Enum):
    """Enumeration of available chunking strategies."""

    FIXED = "fixed"
    SENTENCE = "sentence"
    RECURSIVE = "recursive"
    SEMANTIC = "semantic"
    BOUNDARY = "boundary"


_ALIASES = {
    "character": ChunkingStrategyType.FIXED,
    "markdown": ChunkingStrategyType.RECURSIVE,
    "model": ChunkingStrategyType.BOUNDARY,
}


class UnifiedChunkingFactory:
    """
    Factory for creating unified chunking strategies.

    Strategy-specific collaborators are passed as keyword arguments:
    ``segmenter`` (sentence, recursive, semantic), ``max_sentences`` (sentence),
    ``hierarchy`` or ``separators`` (recursive), ``embedder``, ``min_sentences``
    and ``batch_size`` (semantic), ``predictor`` (boundary).
    """

    @staticmethod
    def resolve_type(strategy_type: str | ChunkingStrategyType) -> ChunkingStrategyType:
        """Normalise a strategy name or alias to its enum member."""
        if isinstance(strategy_type, ChunkingStrategyType):
            return strategy_type

        name = str(strategy_type).strip().lower()
        if name in _ALIASES:
            return _ALIASES[name]

        try:
            return ChunkingStrategyType(name)
        except ValueError as e:
            raise StrategyNotFoundError(str(strategy_type)) from e

    @staticmethod
    def create_strategy(strategy_type: str | ChunkingStrategyType, **kwargs: Any) -> SlabChunkingStrategy:
        """
        Create a unified chunking strategy.

        Args:
            strategy_type: Type of strategy to create
            **kwargs: Additional strategy-specific parameters

        Returns:
            Unified chunking strategy instance

        Raises:
            StrategyNotFoundError: If strategy type is not supported
            InvalidConfigurationError: If a required collaborator is missing
        """
        requested = strategy_type
        strategy_type = UnifiedChunkingFactory.resolve_type(strategy_type)

        logger.info(f"Creating unified {strategy_type.value} strategy")

        if strategy_type == ChunkingStrategyType.FIXED:
            return FixedChunkingStrategy()

        if strategy_type == ChunkingStrategyType.SENTENCE:
            return SentenceChunkingStrategy(
                segmenter=kwargs.get("segmenter"),
                max_sentences=kwargs.get("max_sentences"),
            )

        if strategy_type == ChunkingStrategyType.RECURSIVE:
            hierarchy = kwargs.get("hierarchy")
            if hierarchy is None and kwargs.get("separators") is not None:
                hierarchy = SeparatorHierarchy.from_strings(kwargs["separators"])
            if hierarchy is None and str(requested).strip().lower() == "markdown":
                hierarchy = SeparatorHierarchy.markdown()
            return RecursiveChunkingStrategy(hierarchy=hierarchy, segmenter=kwargs.get("segmenter"))

        if strategy_type == ChunkingStrategyType.SEMANTIC:
            embedder = kwargs.get("embedder")
            if embedder is None:
                if not settings.USE_MOCK_EMBEDDINGS:
                    raise InvalidConfigurationError(
                        "Semantic chunking requires an embedder",
                        {"strategy": strategy_type.value},
                    )
                logger.warning("No embedder supplied, using mock embeddings")
                embedder = MockEmbedder(dimension=settings.MOCK_EMBEDDING_DIM)

            return SemanticChunkingStrategy(
                embedder=embedder,
                segmenter=kwargs.get("segmenter"),
                min_sentences=kwargs.get("min_sentences", 1),
                batch_size=kwargs.get("batch_size"),
            )

        predictor = kwargs.get("predictor")
        if predictor is None:
            raise InvalidConfigurationError(
                "Boundary chunking requires a predictor",
                {"strategy": strategy_type.value},
            )
        return BoundaryChunkingStrategy(predictor=predictor)

    @staticmethod
    def get_available_strategies() -> list[str]:
        """
        Get list of available strategy types.

        Returns:
            List of strategy type names
        """
        return [s.value for s in ChunkingStrategyType]

    @staticmethod
    def create_from_config(config: dict[str, Any]) -> SlabChunkingStrategy:
        """
        Create a strategy from a plain mapping such as a parsed settings file.

        Args:
            config: Mapping with a ``strategy`` key plus strategy-specific parameters

        Returns:
            Unified chunking strategy instance
        """
        params = dict(config)
        try:
            strategy_type = params.pop("strategy")
        except KeyError as e:
            raise InvalidConfigurationError("Strategy configuration must name a 'strategy'") from e

        return UnifiedChunkingFactory.create_strategy(strategy_type, **params)
