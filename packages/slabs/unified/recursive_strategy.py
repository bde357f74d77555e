#!/usr/bin/env python3
"""
Recursive separator-hierarchy chunking strategy.

The document is split at the coarsest separator level; adjacent pieces are
merged greedily while they fit in ``max_size``; any piece still too large is
split again at the next, finer level. The last level is a hard character cut,
so no slab core ever exceeds ``max_size``.
"""

import logging
from collections.abc import Sequence

from slabs.domain.services.overlap import SnapTier, snap_to, snap_to_word_start
from slabs.domain.services.sentence_segmenter import (
    RegexSentenceSegmenter,
    SegmenterLike,
    Span,
    segment_spans,
)
from slabs.domain.services.separators import SeparatorHierarchy, SeparatorKind
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.unified.base import ProgressCallback, SlabChunkingStrategy

logger = logging.getLogger(__name__)


class RecursiveChunkingStrategy(SlabChunkingStrategy):
    """
    Structure-preserving chunking over a separator hierarchy.

    Overlap snaps to a sentence start inside the overlap window, then to a word
    start, then to a raw character offset, and is trimmed so that slabs never
    exceed ``max_size``.
    """

    clamp_overlap_to_max = True

    def __init__(
        self,
        hierarchy: SeparatorHierarchy | None = None,
        segmenter: SegmenterLike | None = None,
    ) -> None:
        """
        Initialize the recursive chunking strategy.

        Args:
            hierarchy: Separator levels, coarsest first (prose preset by default)
            segmenter: Sentence capability for the sentence level and overlap snapping
        """
        super().__init__("recursive")
        self.hierarchy = hierarchy or SeparatorHierarchy.prose()
        self.segmenter = segmenter or RegexSentenceSegmenter()

    def _split_cores(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Span]:
        return self._split_span(content, 0, len(content), 0, config.max_size)

    def _split_span(self, text: str, start: int, end: int, level: int, limit: int) -> list[Span]:
        """Split ``text[start:end]`` starting at hierarchy ``level``."""
        if end - start <= limit:
            return [(start, end)]

        separator = self.hierarchy[level]
        if separator.kind is SeparatorKind.CHARACTER:
            return [(cut, min(cut + limit, end)) for cut in range(start, end, limit)]

        pieces = separator.split(text, start, end, self.segmenter)
        if len(pieces) <= 1:
            logger.debug(f"Separator level {separator.kind.value} did not fire on {start}..{end}, descending")
            return self._split_span(text, start, end, level + 1, limit)

        return self._merge_pieces(text, pieces, level, limit)

    def _merge_pieces(self, text: str, pieces: list[Span], level: int, limit: int) -> list[Span]:
        """Greedily join adjacent pieces while they fit, refining oversized ones."""
        spans: list[Span] = []
        group_start, group_end = pieces[0]

        for start, end in pieces[1:]:
            if end - group_start <= limit:
                group_end = end
                continue

            spans.extend(self._refine(text, group_start, group_end, level, limit))
            group_start, group_end = start, end

        spans.extend(self._refine(text, group_start, group_end, level, limit))
        return spans

    def _refine(self, text: str, start: int, end: int, level: int, limit: int) -> list[Span]:
        if end - start <= limit:
            return [(start, end)]
        return self._split_span(text, start, end, level + 1, limit)

    def _overlap_tiers(self, content: str) -> tuple[Sequence[SnapTier], bool]:
        sentence_starts = [start for start, _ in segment_spans(self.segmenter, content)]
        return [snap_to(sentence_starts), snap_to_word_start(content)], True
