#!/usr/bin/env python3
"""
Unified chunking strategies module.

Every strategy shares one base class, one configuration object and one overlap
engine, and returns the same ordered list of slabs.
"""

from slabs.unified.base import SlabChunkingStrategy
from slabs.unified.boundary_strategy import BoundaryChunkingStrategy, BoundaryPredictor
from slabs.unified.fixed_strategy import FixedChunkingStrategy
from slabs.unified.recursive_strategy import RecursiveChunkingStrategy
from slabs.unified.semantic_strategy import SemanticChunkingStrategy
from slabs.unified.sentence_strategy import SentenceChunkingStrategy

__all__ = [
    "SlabChunkingStrategy",
    "FixedChunkingStrategy",
    "SentenceChunkingStrategy",
    "RecursiveChunkingStrategy",
    "SemanticChunkingStrategy",
    "BoundaryChunkingStrategy",
    "BoundaryPredictor",
]
