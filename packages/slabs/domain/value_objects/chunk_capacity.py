#!/usr/bin/env python3
"""
Chunk capacity value object.

Separates the size a strategy aims for (``desired``) from the ceiling it never
crosses (``max``). With ``desired == max`` the capacity is strict; a larger
``max`` lets structure-aware strategies stay on a coarser boundary when that
only slightly overshoots the target.
"""

from dataclasses import dataclass
from enum import Enum

from slabs.domain.exceptions import ChunkCapacityError


class CapacityFit(str, Enum):
    """Where a size falls relative to a capacity."""

    UNDER = "under"  # Smaller than desired, room for more
    WITHIN = "within"  # desired <= size <= max
    OVER = "over"  # Exceeds max, must split


@dataclass(frozen=True)
class ChunkCapacity:
    """Immutable desired/max pair, both in characters."""

    desired: int
    max: int

    def __post_init__(self) -> None:
        if self.max < self.desired:
            raise ChunkCapacityError(self.desired, self.max)

    @classmethod
    def fixed(cls, size: int) -> "ChunkCapacity":
        """Create a capacity whose desired and max sizes are equal."""
        return cls(desired=size, max=size)

    @classmethod
    def from_range(cls, sizes: range) -> "ChunkCapacity":
        """Create a capacity from a half-open range (``range(400, 600)`` gives max 599)."""
        return cls(desired=sizes.start, max=max(sizes.start, sizes.stop - 1))

    def with_max(self, max_size: int) -> "ChunkCapacity":
        """Return a copy with a different ceiling."""
        return ChunkCapacity(desired=self.desired, max=max_size)

    def fits(self, size: int) -> CapacityFit:
        """Classify ``size`` against this capacity."""
        if size < self.desired:
            return CapacityFit.UNDER
        if size > self.max:
            return CapacityFit.OVER
        return CapacityFit.WITHIN

    def would_overflow(self, current: int, additional: int) -> bool:
        """Check whether growing ``current`` by ``additional`` crosses the ceiling."""
        return current + additional > self.max

    def would_exceed_desired(self, current: int, additional: int) -> bool:
        """Check whether growing ``current`` by ``additional`` passes the desired size."""
        return current + additional > self.desired
