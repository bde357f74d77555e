#!/usr/bin/env python3
"""Similarity threshold value object for the semantic strategy."""

from dataclasses import dataclass

from slabs.domain.exceptions import InvalidConfigurationError

MIN_THRESHOLD = 0.0
MAX_THRESHOLD = 1.0


@dataclass(frozen=True)
class SimilarityThreshold:
    """
    Cosine similarity cut-off between adjacent sentences.

    A pair scoring strictly below the threshold is a topic shift.
    """

    value: float

    def __post_init__(self) -> None:
        if not MIN_THRESHOLD <= self.value <= MAX_THRESHOLD:
            raise InvalidConfigurationError(
                f"Similarity threshold must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}, got {self.value}",
                {"similarity_threshold": self.value},
            )

    def is_break(self, similarity: float) -> bool:
        """Return True when ``similarity`` marks a topic shift."""
        return similarity < self.value

    def __float__(self) -> float:
        return self.value
