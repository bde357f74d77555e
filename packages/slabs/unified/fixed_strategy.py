#!/usr/bin/env python3
"""
Fixed-width chunking strategy.

Cuts the document every ``target_size - overlap`` characters with no regard for
word or sentence structure. Slab ``i`` starts at ``i * (target_size - overlap)``
and every slab except the last is exactly ``target_size`` characters long.
"""

import logging

from slabs.domain.services.sentence_segmenter import Span
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.unified.base import ProgressCallback, SlabChunkingStrategy

logger = logging.getLogger(__name__)


class FixedChunkingStrategy(SlabChunkingStrategy):
    """Character-count chunking with character overlap."""

    def __init__(self) -> None:
        super().__init__("fixed")

    def _split_cores(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Span]:
        length = len(content)
        step = config.step

        cores: list[Span] = []
        core_start = 0
        position = 0
        while core_start < length:
            # The overlap engine extends this core back to position * step
            end = min(position * step + config.target_size, length)
            cores.append((core_start, end))
            core_start = end
            position += 1

            if progress_callback and length > 0:
                progress_callback(min(core_start / length * 100, 99.0))

        return cores

    def estimate_chunks(self, content_length: int, config: ChunkConfig) -> int:
        """Exact slab count for a document of ``content_length`` characters."""
        return config.estimate_chunks(content_length)
