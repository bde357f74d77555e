#!/usr/bin/env python3
"""
Semantic chunking strategy.

Sentences are embedded through an injected embedder, adjacent sentences are
compared with cosine similarity, and a new slab starts wherever the similarity
drops below the configured threshold or the slab would grow past ``target_size``.
The size ceiling always wins over topic coherence.

Embedder failures abort the whole call. Nothing falls back to another strategy.
"""

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from slabs.config import settings
from slabs.domain.entities.slab import Slab
from slabs.domain.exceptions import AsyncEmbedderError, InvalidConfigurationError
from slabs.domain.services.overlap import SnapTier, snap_to
from slabs.domain.services.sentence_segmenter import (
    RegexSentenceSegmenter,
    SegmenterLike,
    Span,
    segment_spans,
)
from slabs.domain.value_objects.chunk_capacity import CapacityFit
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.embedding.base import Embedder, as_embedding_matrix
from slabs.embedding.similarity import adjacent_similarities
from slabs.unified.base import ProgressCallback, SlabChunkingStrategy

logger = logging.getLogger(__name__)


class SemanticChunkingStrategy(SlabChunkingStrategy):
    """
    Embedding-driven grouping of sentences into topic-coherent slabs.

    The embedder may be synchronous or asynchronous. ``embed_batch`` is used
    when available, otherwise ``embed`` is called once per sentence. Either way
    vectors are collected for every sentence before grouping starts.
    """

    clamp_overlap_to_max = True

    def __init__(
        self,
        embedder: Embedder,
        segmenter: SegmenterLike | None = None,
        min_sentences: int = 1,
        batch_size: int | None = None,
    ) -> None:
        """
        Initialize the semantic chunking strategy.

        Args:
            embedder: Object providing ``embed`` and optionally ``embed_batch``
            segmenter: Sentence segmentation capability, regex heuristic by default
            min_sentences: Sentences a slab needs before a topic shift may close it
            batch_size: Sentences per ``embed_batch`` call, 0 for one call per document
        """
        super().__init__("semantic")

        if embedder is None or not callable(getattr(embedder, "embed", None)):
            raise InvalidConfigurationError("Semantic chunking requires an embedder with an 'embed' method")

        if min_sentences < 1:
            raise InvalidConfigurationError(
                "min_sentences must be at least 1",
                {"min_sentences": min_sentences},
            )

        self.embedder = embedder
        self.segmenter = segmenter or RegexSentenceSegmenter()
        self.min_sentences = min_sentences
        self.batch_size = settings.EMBED_BATCH_SIZE if batch_size is None else batch_size

        embed_batch = getattr(embedder, "embed_batch", None)
        self._embed_batch = embed_batch if callable(embed_batch) else None
        self._is_async = inspect.iscoroutinefunction(self._embed_batch or embedder.embed)

        logger.info(
            f"Semantic strategy using {type(embedder).__name__} "
            f"(batched: {self._embed_batch is not None}, async: {self._is_async})"
        )

    def _split_cores(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Span]:
        sentences = segment_spans(self.segmenter, content)
        if len(sentences) < 2:
            return [(0, len(content))]

        texts = [content[start:end] for start, end in sentences]
        if self._is_async:
            embeddings = self._run_async_embedder(texts, progress_callback)
        else:
            embeddings = self._embed_sync(texts, progress_callback)

        return self._group_sentences(sentences, adjacent_similarities(embeddings), config)

    async def chunk_async(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Slab]:
        """
        Asynchronous chunking that awaits asynchronous embedders natively.

        Synchronous embedders run in the default executor.
        """
        if not self._is_async:
            return await super().chunk_async(content, config, progress_callback)

        config.validate()

        if not content:
            return []

        sentences = segment_spans(self.segmenter, content)
        if len(sentences) < 2:
            cores = [(0, len(content))]
        else:
            texts = [content[start:end] for start, end in sentences]
            embeddings = await self._embed_async(texts, progress_callback)
            cores = self._group_sentences(sentences, adjacent_similarities(embeddings), config)

        return self._build_slabs(content, cores, config, progress_callback)

    def _run_async_embedder(self, texts: list[str], progress_callback: ProgressCallback | None) -> NDArray[Any]:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self._embed_async(texts, progress_callback))

        raise AsyncEmbedderError(
            "Asynchronous embedder cannot be driven by chunk() inside a running event loop; use chunk_async()",
            {"embedder": type(self.embedder).__name__},
        )

    def _batches(self, texts: list[str]) -> list[list[str]]:
        if self._embed_batch is None:
            return [[text] for text in texts]
        if self.batch_size <= 0:
            return [texts]
        return [texts[i : i + self.batch_size] for i in range(0, len(texts), self.batch_size)]

    def _embed_sync(self, texts: list[str], progress_callback: ProgressCallback | None) -> NDArray[Any]:
        batches = self._batches(texts)
        vectors: list[Any] = []
        for done, batch in enumerate(batches, start=1):
            try:
                if self._embed_batch is not None:
                    vectors.extend(self._embed_batch(batch))
                else:
                    vectors.append(self.embedder.embed(batch[0]))
            except Exception as e:
                logger.error(f"Embedder failed on batch {done} of {len(batches)}: {e}")
                raise

            self._report_embedding_progress(done, len(batches), progress_callback)

        return as_embedding_matrix(vectors, len(texts))

    async def _embed_async(self, texts: list[str], progress_callback: ProgressCallback | None) -> NDArray[Any]:
        batches = self._batches(texts)
        vectors: list[Any] = []
        for done, batch in enumerate(batches, start=1):
            try:
                if self._embed_batch is not None:
                    vectors.extend(await self._embed_batch(batch))
                else:
                    vectors.append(await self.embedder.embed(batch[0]))
            except Exception as e:
                logger.error(f"Embedder failed on batch {done} of {len(batches)}: {e}")
                raise

            self._report_embedding_progress(done, len(batches), progress_callback)

        return as_embedding_matrix(vectors, len(texts))

    @staticmethod
    def _report_embedding_progress(done: int, total: int, progress_callback: ProgressCallback | None) -> None:
        # Embedding dominates the cost; grouping takes the last 10%
        if progress_callback:
            progress_callback(min(done / total * 90.0, 90.0))

    def _group_sentences(
        self,
        sentences: Sequence[Span],
        similarities: NDArray[np.float64],
        config: ChunkConfig,
    ) -> list[Span]:
        """
        Walk sentences left to right, closing a slab on a topic shift or size overflow.

        Args:
            sentences: Contiguous sentence spans
            similarities: ``similarities[i]`` compares sentence ``i`` and ``i + 1``
            config: Chunking configuration

        Returns:
            Contiguous cores
        """
        threshold = config.threshold
        capacity = config.capacity

        cores: list[Span] = []
        group_start, group_end = sentences[0]
        count = 1
        topic_breaks = 0

        for position in range(1, len(sentences)):
            start, end = sentences[position]

            topic_shift = threshold.is_break(float(similarities[position - 1])) and count >= self.min_sentences
            overflow = capacity.would_exceed_desired(group_end - group_start, end - group_end)

            if topic_shift or overflow:
                cores.append((group_start, group_end))
                group_start, count = start, 0
                topic_breaks += int(topic_shift)

            group_end = end
            count += 1

        cores.append((group_start, group_end))

        oversized = sum(1 for start, end in cores if capacity.fits(end - start) is CapacityFit.OVER)
        if oversized:
            logger.warning(f"{oversized} sentence(s) exceed max_size={capacity.max} and were kept whole")

        logger.debug(
            f"Semantic grouping: {len(sentences)} sentences, {topic_breaks} topic shifts, {len(cores)} slabs"
        )
        return cores

    def _overlap_tiers(self, content: str) -> tuple[Sequence[SnapTier], bool]:
        starts = [start for start, _ in segment_spans(self.segmenter, content)]
        return [snap_to(starts)], False
