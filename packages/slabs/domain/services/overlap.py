#!/usr/bin/env python3
"""
Overlap engine.

Strategies decide where slab cores begin and end; this service turns the cores
into slabs by extending each one (after the first) backwards into the previous
slab. The extension is at most ``overlap`` characters, never reaches before the
start of the previous slab, and, when a size ceiling is given, never makes a
slab longer than that ceiling.

Where the extended start lands is decided by snap tiers. A tier maps a window
``[lo, hi)`` to the first acceptable boundary inside it, or None. Tiers are
tried in order; when none fires the engine falls back to a raw character offset
or to no overlap at all.
"""

import bisect
import logging
from collections.abc import Callable, Sequence

from slabs.domain.entities.slab import Slab
from slabs.domain.exceptions import InvalidConfigurationError
from slabs.domain.services.sentence_segmenter import Span

logger = logging.getLogger(__name__)

SnapTier = Callable[[int, int], int | None]


def snap_to(points: Sequence[int]) -> SnapTier:
    """Build a tier from sorted candidate offsets (sentence starts, for example)."""

    def first_in_window(lo: int, hi: int) -> int | None:
        position = bisect.bisect_left(points, lo)
        if position < len(points) and points[position] < hi:
            return points[position]
        return None

    return first_in_window


def snap_to_word_start(document: str) -> SnapTier:
    """Build a tier that lands on the first word start inside the window."""

    def first_in_window(lo: int, hi: int) -> int | None:
        if lo == 0 and hi > 0 and not document[0].isspace():
            return 0
        for position in range(max(lo, 1), hi):
            if document[position - 1].isspace() and not document[position].isspace():
                return position
        return None

    return first_in_window


class OverlapEngine:
    """Extends slab cores with trailing context from the previous slab."""

    def __init__(self, overlap: int, max_size: int | None = None) -> None:
        if overlap < 0:
            raise InvalidConfigurationError("overlap cannot be negative", {"overlap": overlap})
        if max_size is not None and max_size <= 0:
            raise InvalidConfigurationError("max_size must be positive", {"max_size": max_size})

        self.overlap = overlap
        self.max_size = max_size

    def apply(
        self,
        document: str,
        cores: Sequence[Span],
        tiers: Sequence[SnapTier] = (),
        char_fallback: bool = True,
    ) -> list[Slab]:
        """
        Build slabs from contiguous cores.

        Args:
            document: Source text
            cores: Contiguous ``(start, end)`` spans tiling the document
            tiers: Snap tiers tried in order for each overlap start
            char_fallback: Use the raw window start when no tier fires

        Returns:
            Slabs indexed from 0 whose cores are exactly ``cores``
        """
        slabs: list[Slab] = []
        for index, (core_start, end) in enumerate(cores):
            start = core_start
            if index > 0 and self.overlap > 0:
                start = self._overlap_start(core_start, end, slabs[-1].start, tiers, char_fallback)
            slabs.append(Slab.from_document(document, start, end, index=index, core_start=core_start))

        if self.overlap > 0 and len(slabs) > 1:
            extended = sum(1 for slab in slabs if slab.overlap_length > 0)
            logger.debug(f"Applied overlap to {extended} of {len(slabs) - 1} slab boundaries")

        return slabs

    def _overlap_start(
        self,
        core_start: int,
        end: int,
        previous_start: int,
        tiers: Sequence[SnapTier],
        char_fallback: bool,
    ) -> int:
        lo = max(previous_start, core_start - self.overlap, 0)
        if self.max_size is not None:
            lo = max(lo, end - self.max_size)

        if lo >= core_start:
            return core_start

        for tier in tiers:
            snapped = tier(lo, core_start)
            if snapped is not None:
                return snapped

        return lo if char_fallback else core_start
