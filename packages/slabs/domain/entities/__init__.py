#!/usr/bin/env python3
"""Domain entities for chunking."""

from slabs.domain.entities.slab import Slab, verify_slabs

__all__ = ["Slab", "verify_slabs"]
