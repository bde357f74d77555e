#!/usr/bin/env python3
"""
Domain-specific exceptions for chunking operations.

Configuration problems are reported before any text is processed; capability
failures (embedder, sentence segmenter) abort the chunk call with no partial
result.
"""

from typing import Any


class ChunkingDomainError(Exception):
    """Base exception for all chunking domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional details."""
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidConfigurationError(ChunkingDomainError):
    """Raised when chunking configuration violates business rules."""


class OverlapConfigurationError(InvalidConfigurationError):
    """Raised when overlap configuration is invalid."""

    def __init__(self, overlap: int, target_size: int) -> None:
        """Initialize with overlap information."""
        super().__init__(
            f"Overlap {overlap} must be less than target size {target_size}",
            {"overlap": overlap, "target_size": target_size},
        )
        self.overlap = overlap
        self.target_size = target_size


class ChunkCapacityError(InvalidConfigurationError):
    """Raised when the hard size ceiling is below the desired size."""

    def __init__(self, desired: int, max_size: int) -> None:
        """Initialize with capacity bounds."""
        super().__init__(
            f"max ({max_size}) must be >= desired ({desired})",
            {"desired": desired, "max": max_size},
        )
        self.desired = desired
        self.max_size = max_size


class StrategyNotFoundError(InvalidConfigurationError, ValueError):
    """Raised when a requested chunking strategy is not found."""

    def __init__(self, strategy_name: str) -> None:
        """Initialize with strategy name."""
        super().__init__(
            f"Strategy '{strategy_name}' not found",
            {"strategy_name": strategy_name},
        )
        self.strategy_name = strategy_name


class InvalidChunkError(ChunkingDomainError):
    """Raised when a slab sequence breaks the span contract."""


class EmbedderFailureError(ChunkingDomainError):
    """Raised when the embedding capability cannot produce usable vectors."""


class DimensionMismatchError(EmbedderFailureError):
    """Raised when embedding dimensions don't match expected values."""

    def __init__(self, expected: int, actual: int, position: int) -> None:
        """Initialize with the offending vector position."""
        super().__init__(
            f"Embedding {position} has dimension {actual}, expected {expected}",
            {"expected": expected, "actual": actual, "position": position},
        )
        self.expected = expected
        self.actual = actual
        self.position = position


class AsyncEmbedderError(ChunkingDomainError):
    """Raised when an asynchronous embedder is driven from a running event loop synchronously."""


class SegmentationError(ChunkingDomainError):
    """Raised when the sentence segmentation capability cannot process the input."""
