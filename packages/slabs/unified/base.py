#!/usr/bin/env python3
"""
Unified chunking strategy base class.

Every strategy follows the same pipeline: validate the configuration, cut the
document into contiguous cores, then hand the cores to the overlap engine to
produce the final slabs. Subclasses only decide where cores begin and end and
which boundaries overlap may snap to.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from slabs.config import settings
from slabs.domain.entities.slab import Slab, verify_slabs
from slabs.domain.services.overlap import OverlapEngine, SnapTier
from slabs.domain.services.sentence_segmenter import Span
from slabs.domain.value_objects.chunk_config import ChunkConfig

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class SlabChunkingStrategy(ABC):
    """
    Single abstract base class for all chunking strategies.

    Strategies hold no per-call state, so one instance can serve concurrent
    chunk calls over different documents.
    """

    #: Apply ``max_size`` to slabs after overlap is added
    clamp_overlap_to_max = False

    def __init__(self, name: str) -> None:
        """
        Initialize the strategy with a name.

        Args:
            name: The name of the strategy
        """
        self._name = name

    @property
    def name(self) -> str:
        """Get the strategy name."""
        return self._name

    def chunk(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Slab]:
        """
        Apply the chunking strategy to break content into slabs.

        Args:
            content: The text content to chunk
            config: Configuration parameters for chunking
            progress_callback: Optional callback to report progress (0-100)

        Returns:
            Ordered slabs; empty when content is empty

        Raises:
            InvalidConfigurationError: If the configuration is invalid
        """
        config.validate()

        if not content:
            return []

        cores = self._split_cores(content, config, progress_callback)
        return self._build_slabs(content, cores, config, progress_callback)

    async def chunk_async(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Slab]:
        """
        Asynchronous chunking.

        Args:
            content: The text content to chunk
            config: Configuration parameters
            progress_callback: Optional progress callback

        Returns:
            Ordered slabs
        """
        config.validate()

        if not content:
            return []

        # Run synchronous method in executor to avoid blocking
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None,
            self.chunk,
            content,
            config,
            progress_callback,
        )

    @abstractmethod
    def _split_cores(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Span]:
        """
        Cut non-empty content into contiguous cores.

        Returns:
            Spans tiling ``[0, len(content))`` in order
        """

    def _overlap_tiers(self, content: str) -> tuple[Sequence[SnapTier], bool]:
        """
        Snap tiers for overlap starts and whether raw character offsets are allowed.

        Character overlap by default.
        """
        return (), True

    def _build_slabs(
        self,
        content: str,
        cores: list[Span],
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Slab]:
        """Turn cores into slabs, check them when configured to and report completion."""
        engine = OverlapEngine(
            config.overlap,
            max_size=config.max_size if self.clamp_overlap_to_max else None,
        )

        if config.overlap > 0 and len(cores) > 1:
            tiers, char_fallback = self._overlap_tiers(content)
        else:
            tiers, char_fallback = (), True

        slabs = engine.apply(content, cores, tiers=tiers, char_fallback=char_fallback)

        if settings.VALIDATE_SLABS:
            verify_slabs(content, slabs)

        logger.debug(f"{self._name} strategy produced {len(slabs)} slabs from {len(content)} characters")

        if progress_callback:
            progress_callback(100.0)

        return slabs

    def validate_content(self, content: str) -> tuple[bool, str | None]:
        """
        Validate that content is suitable for this strategy.

        Empty content is valid and simply produces no slabs.

        Args:
            content: The content to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if len(content) > settings.MAX_DOCUMENT_CHARS:
            return False, f"Content too large: {len(content)} characters"

        try:
            content.encode("utf-8")
        except UnicodeEncodeError as e:
            return False, f"Content is not valid Unicode at position {e.start}"

        return True, None

    def estimate_chunks(self, content_length: int, config: ChunkConfig) -> int:
        """
        Estimate the number of slabs that will be produced.

        Args:
            content_length: Length of content in characters
            config: Configuration parameters

        Returns:
            Estimated number of slabs
        """
        if content_length <= 0:
            return 0

        return max(1, -(-content_length // config.target_size))

    def __repr__(self) -> str:
        """String representation of the strategy."""
        return f"{self.__class__.__name__}(name='{self._name}')"
