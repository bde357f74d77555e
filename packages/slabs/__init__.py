#!/usr/bin/env python3
"""
Slabs: position-tracked text chunking for retrieval pipelines.

This package splits documents into contiguous slabs that keep their original
character offsets, using fixed-width, sentence, recursive, semantic or
boundary-model strategies.
"""

from slabs.domain.entities.slab import Slab, verify_slabs
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.unified.factory import ChunkingStrategyType, UnifiedChunkingFactory

__version__ = "0.1.0"

__all__ = [
    "ChunkConfig",
    "ChunkingStrategyType",
    "Slab",
    "UnifiedChunkingFactory",
    "verify_slabs",
]
