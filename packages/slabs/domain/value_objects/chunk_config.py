#!/usr/bin/env python3
"""
Immutable chunking configuration value object.

This module defines the configuration shared by every chunking strategy with
built-in validation and business rule enforcement. All sizes are measured in
characters of the source document.
"""

from typing import Any

from slabs.config import ChunkingSettings, settings
from slabs.domain.exceptions import InvalidConfigurationError, OverlapConfigurationError
from slabs.domain.value_objects.chunk_capacity import ChunkCapacity
from slabs.domain.value_objects.similarity_threshold import SimilarityThreshold


class ChunkConfig:
    """
    Immutable configuration for chunking operations.

    ``target_size`` is the size grouping aims for, ``max_size`` the ceiling the
    structure-aware strategies never exceed (defaults to ``target_size``) and
    ``overlap`` the amount of trailing context repeated at the start of each
    slab after the first.
    """

    def __init__(
        self,
        target_size: int,
        overlap: int = 0,
        max_size: int | None = None,
        similarity_threshold: float = 0.5,
    ) -> None:
        """Initialize configuration with validation.

        Args:
            target_size: Desired slab size in characters
            overlap: Characters of trailing context carried into the next slab
            max_size: Hard ceiling in characters, defaults to target_size
            similarity_threshold: Semantic split threshold (0.0 to 1.0)

        Raises:
            InvalidConfigurationError: If any parameter violates the rules
        """
        self.target_size = target_size
        self.overlap = overlap
        self.max_size = target_size if max_size is None else max_size
        self.similarity_threshold = similarity_threshold

        self.validate()

    def validate(self) -> None:
        """Check every business rule, raising on the first violation."""
        for field in ("target_size", "overlap", "max_size"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigurationError(
                    f"{field} must be an integer",
                    {field: value},
                )

        if self.target_size <= 0:
            raise InvalidConfigurationError(
                "target_size must be positive",
                {"target_size": self.target_size},
            )

        if self.overlap < 0:
            raise InvalidConfigurationError(
                "overlap cannot be negative",
                {"overlap": self.overlap},
            )

        # overlap >= target_size would stall the fixed strategy
        if self.overlap >= self.target_size:
            raise OverlapConfigurationError(self.overlap, self.target_size)

        # Both constructors raise their own domain errors
        ChunkCapacity(desired=self.target_size, max=self.max_size)
        SimilarityThreshold(self.similarity_threshold)

    @property
    def capacity(self) -> ChunkCapacity:
        """Desired/max pair derived from this configuration."""
        return ChunkCapacity(desired=self.target_size, max=self.max_size)

    @property
    def threshold(self) -> SimilarityThreshold:
        """Similarity threshold as a value object."""
        return SimilarityThreshold(self.similarity_threshold)

    @property
    def step(self) -> int:
        """Distance between the starts of consecutive fixed-width slabs."""
        return self.target_size - self.overlap

    def estimate_chunks(self, content_length: int) -> int:
        """
        Estimate the number of fixed-width slabs for a document length.

        Args:
            content_length: Document length in characters

        Returns:
            Number of slabs a fixed-width pass would produce
        """
        if content_length <= 0:
            return 0

        if content_length <= self.target_size:
            return 1

        remaining = content_length - self.target_size
        return 1 + (remaining + self.step - 1) // self.step

    @classmethod
    def from_settings(cls, source: ChunkingSettings | None = None, **overrides: Any) -> "ChunkConfig":
        """Build a configuration from process-wide defaults.

        Args:
            source: Settings to read, defaults to the module-level instance
            **overrides: Explicit values that take precedence

        Returns:
            Validated configuration
        """
        source = source or settings
        params: dict[str, Any] = {
            "target_size": source.DEFAULT_TARGET_SIZE,
            "overlap": source.DEFAULT_OVERLAP,
            "similarity_threshold": source.DEFAULT_SIMILARITY_THRESHOLD,
        }
        params.update(overrides)
        return cls(**params)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChunkConfig":
        """Recreate a configuration produced by ``to_dict``."""
        allowed = {"target_size", "overlap", "max_size", "similarity_threshold"}
        unknown = set(data) - allowed
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration parameter(s): {', '.join(sorted(unknown))}",
                {"parameters": sorted(unknown)},
            )
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "target_size": self.target_size,
            "overlap": self.overlap,
            "max_size": self.max_size,
            "similarity_threshold": self.similarity_threshold,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChunkConfig):
            return False
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.target_size, self.overlap, self.max_size, self.similarity_threshold))

    def __repr__(self) -> str:
        return (
            f"ChunkConfig(target_size={self.target_size}, overlap={self.overlap}, "
            f"max_size={self.max_size}, similarity_threshold={self.similarity_threshold})"
        )
