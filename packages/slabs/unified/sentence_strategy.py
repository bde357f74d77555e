#!/usr/bin/env python3
"""
Sentence-aware chunking strategy.

Groups whole sentences into slabs and never cuts inside a sentence. A sentence
longer than the size budget becomes a slab of its own. Overlap is carried as
whole trailing sentences.
"""

import logging
from collections.abc import Sequence

from slabs.domain.exceptions import InvalidConfigurationError
from slabs.domain.services.overlap import SnapTier, snap_to
from slabs.domain.services.sentence_segmenter import (
    RegexSentenceSegmenter,
    SegmenterLike,
    Span,
    segment_spans,
)
from slabs.domain.value_objects.chunk_capacity import CapacityFit, ChunkCapacity
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.unified.base import ProgressCallback, SlabChunkingStrategy

logger = logging.getLogger(__name__)


class SentenceChunkingStrategy(SlabChunkingStrategy):
    """
    Greedy sentence grouping under a size budget.

    Sentences are added to the current slab until the next one would push its
    core past ``target_size``, or until ``max_sentences`` sentences are collected.
    Only sentences longer than ``max_size`` are reported as oversized.
    """

    def __init__(self, segmenter: SegmenterLike | None = None, max_sentences: int | None = None) -> None:
        """
        Initialize the sentence chunking strategy.

        Args:
            segmenter: Sentence segmentation capability, regex heuristic by default
            max_sentences: Optional cap on sentences per slab
        """
        super().__init__("sentence")

        if max_sentences is not None and max_sentences < 1:
            raise InvalidConfigurationError(
                "max_sentences must be at least 1",
                {"max_sentences": max_sentences},
            )

        self.segmenter = segmenter or RegexSentenceSegmenter()
        self.max_sentences = max_sentences

    def _split_cores(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Span]:
        sentences = segment_spans(self.segmenter, content)
        return self._group_sentences(sentences, config.capacity)

    def _group_sentences(self, sentences: list[Span], capacity: ChunkCapacity) -> list[Span]:
        cores: list[Span] = []
        group_start, group_end = sentences[0]
        count = 1

        for start, end in sentences[1:]:
            too_long = capacity.would_exceed_desired(group_end - group_start, end - group_end)
            too_many = self.max_sentences is not None and count >= self.max_sentences
            if too_long or too_many:
                cores.append((group_start, group_end))
                group_start, count = start, 0

            group_end = end
            count += 1

        cores.append((group_start, group_end))

        oversized = sum(1 for start, end in cores if capacity.fits(end - start) is CapacityFit.OVER)
        if oversized:
            logger.warning(f"{oversized} sentence(s) exceed max_size={capacity.max} and were kept whole")

        return cores

    def _overlap_tiers(self, content: str) -> tuple[Sequence[SnapTier], bool]:
        starts = [start for start, _ in segment_spans(self.segmenter, content)]
        return [snap_to(starts)], False
