#!/usr/bin/env python3
"""
Slab entity: a contiguous piece of the source document with its position.

A slab spans ``[start, end)`` of the document and its ``text`` is exactly that
slice. The region ``[start, core_start)`` is overlap repeated from the previous
slab; ``[core_start, end)`` is the slab's own core. Cores of consecutive slabs
are disjoint and, concatenated, rebuild the document.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from slabs.domain.exceptions import InvalidChunkError


@dataclass(frozen=True)
class Slab:
    """Immutable chunk of text with its offsets in the original document."""

    text: str
    start: int
    end: int
    index: int = 0
    core_start: int | None = None

    def __post_init__(self) -> None:
        """Validate offsets after initialization."""
        if self.core_start is None:
            object.__setattr__(self, "core_start", self.start)

        if self.start < 0:
            raise ValueError(f"Start offset must be non-negative, got {self.start}")

        if self.end < self.start:
            raise ValueError(f"End offset ({self.end}) must not precede start offset ({self.start})")

        if not self.start <= self.core_start <= self.end:  # type: ignore[operator]
            raise ValueError(f"Core start {self.core_start} outside span {self.start}..{self.end}")

        if len(self.text) != self.end - self.start:
            raise ValueError(f"Text length {len(self.text)} does not match span {self.start}..{self.end}")

        if self.index < 0:
            raise ValueError(f"Slab index must be non-negative, got {self.index}")

    @classmethod
    def from_document(
        cls,
        document: str,
        start: int,
        end: int,
        index: int = 0,
        core_start: int | None = None,
    ) -> "Slab":
        """Create a slab by slicing the document."""
        return cls(text=document[start:end], start=start, end=end, index=index, core_start=core_start)

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end == self.start

    @property
    def span(self) -> range:
        """Character span of the slab in the document."""
        return range(self.start, self.end)

    @property
    def core_span(self) -> range:
        """Character span of the non-overlap region."""
        return range(self.core_start, self.end)  # type: ignore[arg-type]

    @property
    def overlap_length(self) -> int:
        return self.core_start - self.start  # type: ignore[operator]

    @property
    def core_text(self) -> str:
        """Text of the non-overlap region."""
        return self.text[self.overlap_length :]

    def __str__(self) -> str:
        return f"Slab {{ index: {self.index}, span: {self.start}..{self.end}, len: {len(self)} }}"


def verify_slabs(document: str, slabs: Sequence[Slab]) -> None:
    """
    Check a slab sequence against the span contract.

    Args:
        document: The text the slabs were produced from
        slabs: Output of a chunking strategy

    Raises:
        InvalidChunkError: On the first violated rule
    """
    if not document:
        if slabs:
            raise InvalidChunkError("Empty document must produce no slabs", {"count": len(slabs)})
        return

    if not slabs:
        raise InvalidChunkError("Non-empty document produced no slabs", {"length": len(document)})

    cursor = 0
    previous_start = 0
    for position, slab in enumerate(slabs):
        details = {"index": slab.index, "start": slab.start, "end": slab.end}

        if slab.index != position:
            raise InvalidChunkError(f"Slab at position {position} has index {slab.index}", details)

        if slab.end > len(document):
            raise InvalidChunkError(f"Slab {position} ends past the document ({len(document)})", details)

        if document[slab.start : slab.end] != slab.text:
            raise InvalidChunkError(f"Slab {position} text does not match the document", details)

        if slab.core_start != cursor:
            raise InvalidChunkError(f"Slab {position} core starts at {slab.core_start}, expected {cursor}", details)

        if slab.start < previous_start:
            raise InvalidChunkError(f"Slab {position} overlap reaches before the previous slab", details)

        cursor = slab.end
        previous_start = slab.start

    if cursor != len(document):
        raise InvalidChunkError(
            f"Slab cores cover {cursor} of {len(document)} characters",
            {"covered": cursor, "length": len(document)},
        )
