#!/usr/bin/env python3
"""
Separator hierarchy for recursive chunking.

The hierarchy is an ordered list of separator levels, coarsest first. Each
level is plain data (a kind tag plus an optional literal) and knows how to cut
a span of the document into contiguous pieces. Pieces always tile the span they
came from, so no delimiter is lost: a separator stays attached to the end of the
piece before it, or to the start of the piece after it for leading separators
such as Markdown headings.

The last level is always ``CHARACTER``, which the recursive strategy resolves
with a hard cut at the size ceiling.
"""

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from slabs.domain.exceptions import InvalidConfigurationError
from slabs.domain.services.sentence_segmenter import (
    RegexSentenceSegmenter,
    SegmenterLike,
    Span,
    segment_spans,
)

_WORD_PIECE = re.compile(r"\s*\S+\s*|\s+")


class SeparatorKind(str, Enum):
    """Structural unit a separator level splits on."""

    PARAGRAPH = "paragraph"
    LINE = "line"
    SENTENCE = "sentence"
    WORD = "word"
    LITERAL = "literal"
    CHARACTER = "character"


@dataclass(frozen=True)
class Separator:
    """One level of the hierarchy."""

    kind: SeparatorKind
    literal: str | None = None
    leading: bool = False  # Attach the literal to the following piece

    def __post_init__(self) -> None:
        needs_literal = self.kind in {SeparatorKind.PARAGRAPH, SeparatorKind.LINE, SeparatorKind.LITERAL}
        if needs_literal and not self.literal:
            raise InvalidConfigurationError(
                f"Separator of kind '{self.kind.value}' requires a literal",
                {"kind": self.kind.value},
            )

    def split(self, text: str, start: int, end: int, segmenter: SegmenterLike | None = None) -> list[Span]:
        """
        Cut ``text[start:end]`` into contiguous pieces at this level.

        Args:
            text: Full document
            start: Span start
            end: Span end
            segmenter: Sentence capability used by the SENTENCE level

        Returns:
            Pieces tiling ``[start, end)``; a single piece when the level does not fire
        """
        if end <= start:
            return []

        if self.kind is SeparatorKind.CHARACTER:
            return [(i, i + 1) for i in range(start, end)]

        if self.kind is SeparatorKind.SENTENCE:
            spans = segment_spans(segmenter or RegexSentenceSegmenter(), text[start:end])
            return [(start + s, start + e) for s, e in spans]

        if self.kind is SeparatorKind.WORD:
            # Leading whitespace stays with the first word, trailing whitespace with the word before it
            return [(m.start(), m.end()) for m in _WORD_PIECE.finditer(text, start, end)]

        return self._split_literal(text, start, end)

    def _split_literal(self, text: str, start: int, end: int) -> list[Span]:
        literal = self.literal or ""
        cuts: list[int] = []
        position = text.find(literal, start, end)
        while position != -1:
            cut = position if self.leading else position + len(literal)
            if start < cut < end:
                cuts.append(cut)
            position = text.find(literal, position + len(literal), end)

        pieces: list[Span] = []
        previous = start
        for cut in cuts:
            if cut > previous:
                pieces.append((previous, cut))
                previous = cut
        pieces.append((previous, end))
        return pieces


PARAGRAPH = Separator(SeparatorKind.PARAGRAPH, "\n\n")
LINE = Separator(SeparatorKind.LINE, "\n")
SENTENCE = Separator(SeparatorKind.SENTENCE)
WORD = Separator(SeparatorKind.WORD)
CHARACTER = Separator(SeparatorKind.CHARACTER)


class SeparatorHierarchy:
    """Ordered, immutable list of separator levels ending at CHARACTER."""

    def __init__(self, levels: Iterable[Separator]) -> None:
        self._levels: tuple[Separator, ...] = tuple(levels)

        if not self._levels:
            raise InvalidConfigurationError("Separator hierarchy cannot be empty")

        if self._levels[-1].kind is not SeparatorKind.CHARACTER:
            raise InvalidConfigurationError(
                "Separator hierarchy must end with the character level",
                {"last_level": self._levels[-1].kind.value},
            )

        if any(level.kind is SeparatorKind.CHARACTER for level in self._levels[:-1]):
            raise InvalidConfigurationError("The character level can only appear last")

    @classmethod
    def prose(cls) -> "SeparatorHierarchy":
        """Paragraph, line, sentence, word, character."""
        return cls([PARAGRAPH, LINE, SENTENCE, WORD, CHARACTER])

    @classmethod
    def markdown(cls) -> "SeparatorHierarchy":
        """Level-2 and level-3 headings, then the prose levels."""
        return cls(
            [
                Separator(SeparatorKind.LITERAL, "\n## ", leading=True),
                Separator(SeparatorKind.LITERAL, "\n### ", leading=True),
                PARAGRAPH,
                LINE,
                SENTENCE,
                WORD,
                CHARACTER,
            ]
        )

    @classmethod
    def from_strings(cls, separators: Sequence[str]) -> "SeparatorHierarchy":
        """
        Build a hierarchy from literal separators, coarsest first.

        ``" "`` maps to the word level and ``""`` to the character level; the
        character level is appended when missing.
        """
        levels: list[Separator] = []
        for literal in separators:
            if literal == "":
                break
            if literal == " ":
                levels.append(WORD)
            elif literal == "\n\n":
                levels.append(PARAGRAPH)
            elif literal == "\n":
                levels.append(LINE)
            else:
                levels.append(Separator(SeparatorKind.LITERAL, literal))
        levels.append(CHARACTER)
        return cls(levels)

    @property
    def levels(self) -> tuple[Separator, ...]:
        return self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, position: int) -> Separator:
        return self._levels[position]

    def __iter__(self) -> Iterator[Separator]:
        return iter(self._levels)

    def __repr__(self) -> str:
        kinds = ", ".join(repr(level.literal) if level.literal else level.kind.value for level in self._levels)
        return f"SeparatorHierarchy([{kinds}])"
