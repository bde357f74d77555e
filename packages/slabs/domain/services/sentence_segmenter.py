#!/usr/bin/env python3
"""
Sentence segmentation capability.

The engine only needs ``text -> ordered (start, end) spans`` that cover the
whole input without gaps or overlaps. ``RegexSentenceSegmenter`` is the
built-in heuristic; any object with a ``segment`` method, or a plain callable,
can replace it.

Boundary heuristic:
- A run of ``.``, ``!`` or ``?`` (plus closing quotes/brackets) followed by
  whitespace ends a sentence.
- Not when the period closes a known abbreviation (Dr., etc.) or a
  single-letter initial (the "C." in "D.C.").
- Not when the next non-space character is lowercase ("e.g. the").
- A blank line always ends a sentence.
- Trailing whitespace stays with the sentence it follows.
"""

import logging
import re
from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from slabs.domain.exceptions import SegmentationError

logger = logging.getLogger(__name__)

Span = tuple[int, int]

DEFAULT_ABBREVIATIONS = frozenset(
    {
        "mr",
        "mrs",
        "ms",
        "dr",
        "prof",
        "sr",
        "jr",
        "st",
        "vs",
        "etc",
        "eg",
        "ie",
        "al",
        "inc",
        "ltd",
        "corp",
        "co",
        "no",
        "fig",
        "approx",
        "jan",
        "feb",
        "mar",
        "apr",
        "jun",
        "jul",
        "aug",
        "sep",
        "sept",
        "oct",
        "nov",
        "dec",
    }
)

_TERMINATOR = re.compile(r"[.!?]+[\"'”’)\]]*(\s+)")
_BLANK_LINE = re.compile(r"\n[ \t]*\n\s*")
_WORD_BEFORE = re.compile(r"([A-Za-z]+)\.*$")


@runtime_checkable
class SentenceSegmenter(Protocol):
    """Capability that splits text into contiguous sentence spans."""

    def segment(self, text: str) -> list[Span]:
        """Return ordered, non-overlapping spans covering ``0..len(text)``."""
        ...


SegmenterLike = SentenceSegmenter | Callable[[str], Sequence[Span]]


class RegexSentenceSegmenter:
    """Punctuation-driven sentence segmenter with abbreviation handling."""

    def __init__(self, abbreviations: frozenset[str] | set[str] | None = None) -> None:
        self.abbreviations = frozenset(a.lower().rstrip(".") for a in (abbreviations or DEFAULT_ABBREVIATIONS))

    def segment(self, text: str) -> list[Span]:
        """Split ``text`` into sentence spans.

        Args:
            text: Text to segment

        Returns:
            Ordered spans covering the whole text

        Raises:
            SegmentationError: If the text cannot be encoded as UTF-8
        """
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SegmentationError(
                f"Text is not valid Unicode at position {e.start}",
                {"position": e.start, "reason": e.reason},
            ) from e

        if not text:
            return []

        boundaries = sorted(set(self._candidate_boundaries(text)))

        spans: list[Span] = []
        start = 0
        for boundary in boundaries:
            # Leading whitespace joins the sentence that follows it
            if start < boundary < len(text) and text[start:boundary].strip():
                spans.append((start, boundary))
                start = boundary
        spans.append((start, len(text)))
        return spans

    def _candidate_boundaries(self, text: str) -> list[int]:
        boundaries = [match.end() for match in _BLANK_LINE.finditer(text)]

        for match in _TERMINATOR.finditer(text):
            boundary = match.end()
            if boundary >= len(text):
                continue

            if text[match.start()] == "." and self._is_abbreviation(text, match.start()):
                continue

            if text[boundary].islower():
                continue

            boundaries.append(boundary)

        return boundaries

    def _is_abbreviation(self, text: str, period: int) -> bool:
        """Check whether the period at ``period`` closes an abbreviation or initial."""
        word = _WORD_BEFORE.search(text[max(0, period - 20) : period])
        if word is None:
            return False

        token = word.group(1)
        if len(token) == 1 and token.isupper():
            return True

        return token.lower() in self.abbreviations


def segment_spans(segmenter: SegmenterLike, text: str) -> list[Span]:
    """
    Run a segmenter and check its output is total and contiguous.

    Args:
        segmenter: Object with ``segment`` or a callable
        text: Text to segment

    Returns:
        Validated sentence spans

    Raises:
        SegmentationError: If the capability fails or returns unusable spans
    """
    run = segmenter.segment if isinstance(segmenter, SentenceSegmenter) else segmenter
    try:
        spans = [(int(start), int(end)) for start, end in run(text)]
    except SegmentationError:
        raise
    except Exception as e:
        logger.error(f"Sentence segmentation failed: {e}")
        raise SegmentationError(f"Sentence segmentation failed: {e}") from e

    if not text:
        return []

    cursor = 0
    for start, end in spans:
        if start != cursor or end <= start:
            raise SegmentationError(
                f"Segmenter returned span {start}..{end}, expected one starting at {cursor}",
                {"span": (start, end), "expected_start": cursor},
            )
        cursor = end

    if cursor != len(text):
        raise SegmentationError(
            f"Segmenter spans cover {cursor} of {len(text)} characters",
            {"covered": cursor, "length": len(text)},
        )

    return spans
