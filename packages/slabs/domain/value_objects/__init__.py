#!/usr/bin/env python3
"""
Value objects for chunking domain.

Value objects are immutable objects that represent concepts in the domain
without identity.
"""

from slabs.domain.value_objects.chunk_capacity import CapacityFit, ChunkCapacity
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.domain.value_objects.similarity_threshold import SimilarityThreshold

__all__ = ["CapacityFit", "ChunkCapacity", "ChunkConfig", "SimilarityThreshold"]
