#!/usr/bin/env python3
"""
Pure domain layer for chunking operations.

This module provides the span model, configuration value objects and the
services shared by every strategy, independent of any embedding backend.
"""

from slabs.domain.entities.slab import Slab, verify_slabs
from slabs.domain.exceptions import (
    AsyncEmbedderError,
    ChunkCapacityError,
    ChunkingDomainError,
    DimensionMismatchError,
    EmbedderFailureError,
    InvalidChunkError,
    InvalidConfigurationError,
    OverlapConfigurationError,
    SegmentationError,
    StrategyNotFoundError,
)
from slabs.domain.value_objects.chunk_capacity import CapacityFit, ChunkCapacity
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.domain.value_objects.similarity_threshold import SimilarityThreshold

__all__ = [
    # Entities
    "Slab",
    "verify_slabs",
    # Value Objects
    "CapacityFit",
    "ChunkCapacity",
    "ChunkConfig",
    "SimilarityThreshold",
    # Exceptions
    "ChunkingDomainError",
    "InvalidConfigurationError",
    "OverlapConfigurationError",
    "ChunkCapacityError",
    "StrategyNotFoundError",
    "InvalidChunkError",
    "EmbedderFailureError",
    "DimensionMismatchError",
    "AsyncEmbedderError",
    "SegmentationError",
]
