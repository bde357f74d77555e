#!/usr/bin/env python3
"""
Boundary-model chunking strategy.

Delegates boundary detection to an injected predictor, typically a token
classification model trained to spot segment breaks, and cuts the document at
the offsets it returns.
"""

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from slabs.domain.exceptions import InvalidConfigurationError
from slabs.domain.services.sentence_segmenter import Span
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.unified.base import ProgressCallback, SlabChunkingStrategy

logger = logging.getLogger(__name__)


@runtime_checkable
class BoundaryPredictor(Protocol):
    """Capability that predicts character offsets where a new slab should start."""

    def predict_splits(self, text: str) -> Sequence[int]:
        ...


class BoundaryChunkingStrategy(SlabChunkingStrategy):
    """
    Cuts at predicted offsets.

    Offsets outside ``(0, len(text))`` and offsets not greater than the previous
    accepted one are ignored. Overlap is measured in characters.
    """

    def __init__(self, predictor: BoundaryPredictor) -> None:
        super().__init__("boundary")

        if not isinstance(predictor, BoundaryPredictor):
            raise InvalidConfigurationError("Boundary chunking requires a predictor with a 'predict_splits' method")

        self.predictor = predictor

    def _split_cores(
        self,
        content: str,
        config: ChunkConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> list[Span]:
        try:
            predicted = list(self.predictor.predict_splits(content))
        except Exception as e:
            logger.error(f"Boundary predictor failed: {e}")
            raise

        cores: list[Span] = []
        start = 0
        for offset in predicted:
            if start < offset < len(content):
                cores.append((start, offset))
                start = offset
        cores.append((start, len(content)))

        ignored = len(predicted) - (len(cores) - 1)
        if ignored:
            logger.debug(f"Ignored {ignored} out-of-order or out-of-range boundary predictions")

        return cores
