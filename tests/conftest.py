"""Shared test configuration and fixtures."""

import sys
from collections.abc import Generator
from pathlib import Path

import numpy as np
import pytest

# Make the packages/ source root importable without an editable install
PACKAGES_DIR = Path(__file__).resolve().parent.parent / "packages"
if str(PACKAGES_DIR) not in sys.path:
    sys.path.insert(0, str(PACKAGES_DIR))

from slabs.config import settings  # noqa: E402
from slabs.domain.entities.slab import Slab  # noqa: E402


class TopicEmbedder:
    """Deterministic fake embedder: sentences mentioning the same topic word share a direction.

    Topics are matched case-insensitively against a fixed list; sentences with
    no known topic map to the last axis.
    """

    TOPICS = ("cat", "rocket", "bread", "ocean")

    def __init__(self) -> None:
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        lowered = text.lower()
        vector = [0.0] * (len(self.TOPICS) + 1)
        for axis, topic in enumerate(self.TOPICS):
            if topic in lowered:
                vector[axis] = 1.0
                return vector
        vector[-1] = 1.0
        return vector


class BatchTopicEmbedder(TopicEmbedder):
    """TopicEmbedder that also supports batched calls."""

    def __init__(self) -> None:
        super().__init__()
        self.batches: list[list[str]] = []

    def embed_batch(self, texts: list[str]) -> np.ndarray:
        self.batches.append(list(texts))
        return np.array([TopicEmbedder.embed(self, text) for text in texts])


class AsyncTopicEmbedder(TopicEmbedder):
    """TopicEmbedder exposing a coroutine ``embed``."""

    async def embed(self, text: str) -> list[float]:  # type: ignore[override]
        return TopicEmbedder.embed(self, text)


@pytest.fixture()
def topic_embedder() -> TopicEmbedder:
    return TopicEmbedder()


@pytest.fixture()
def batch_topic_embedder() -> BatchTopicEmbedder:
    return BatchTopicEmbedder()


@pytest.fixture()
def async_topic_embedder() -> AsyncTopicEmbedder:
    return AsyncTopicEmbedder()


@pytest.fixture()
def validate_slabs() -> Generator[None, None, None]:
    """Turn on span-contract verification inside every strategy for one test."""
    original = settings.VALIDATE_SLABS
    settings.VALIDATE_SLABS = True
    yield
    settings.VALIDATE_SLABS = original


@pytest.fixture()
def prose_document() -> str:
    """Two short paragraphs of ordinary prose."""
    return (
        "The committee met on Tuesday. Dr. Smith presented the annual budget, "
        "which had grown by ten percent. Several members asked questions!\n\n"
        "After lunch the discussion moved to hiring. Nobody objected to the new "
        "positions. The meeting ended at five o'clock."
    )


def reconstruct(slabs: list[Slab]) -> str:
    """Concatenate the non-overlap cores of a slab sequence."""
    return "".join(slab.core_text for slab in slabs)


def assert_span_contract(document: str, slabs: list[Slab]) -> None:
    """Check offsets, text fidelity and core reconstruction for any strategy output."""
    for position, slab in enumerate(slabs):
        assert slab.index == position
        assert 0 <= slab.start <= slab.end <= len(document)
        assert document[slab.start : slab.end] == slab.text
    assert reconstruct(slabs) == document


@pytest.fixture()
def span_contract():
    """Return the span-contract assertion helper."""
    return assert_span_contract
