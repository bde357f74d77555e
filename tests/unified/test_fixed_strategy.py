"""Tests for the fixed-width chunking strategy."""

from unittest.mock import MagicMock, patch

import pytest

from slabs.domain.exceptions import OverlapConfigurationError
from slabs.domain.value_objects.chunk_config import ChunkConfig
from slabs.unified.fixed_strategy import FixedChunkingStrategy


def alphabet(length: int) -> str:
    return "".join(chr(97 + i % 26) for i in range(length))


@pytest.fixture()
def strategy() -> FixedChunkingStrategy:
    return FixedChunkingStrategy()


class TestFixedChunking:
    """Test suite for FixedChunkingStrategy."""

    def test_three_slabs_with_overlap(self, strategy: FixedChunkingStrategy, span_contract) -> None:
        # Arrange
        content = alphabet(1200)
        config = ChunkConfig(target_size=500, overlap=50)

        # Act
        slabs = strategy.chunk(content, config)

        # Assert
        assert len(slabs) == 3
        assert [s.start for s in slabs] == [0, 450, 900]
        assert [s.end for s in slabs] == [500, 950, 1200]
        assert [s.core_start for s in slabs] == [0, 500, 950]
        assert [len(s) for s in slabs] == [500, 500, 300]
        span_contract(content, slabs)

    def test_slab_starts_follow_step(self, strategy: FixedChunkingStrategy) -> None:
        content = alphabet(1000)
        config = ChunkConfig(target_size=100, overlap=30)

        slabs = strategy.chunk(content, config)

        assert [s.start for s in slabs] == [i * 70 for i in range(len(slabs))]
        assert all(len(s) == 100 for s in slabs[:-1])

    def test_no_overlap_is_contiguous(self, strategy: FixedChunkingStrategy, span_contract) -> None:
        content = alphabet(250)

        slabs = strategy.chunk(content, ChunkConfig(target_size=100))

        assert [(s.start, s.end) for s in slabs] == [(0, 100), (100, 200), (200, 250)]
        span_contract(content, slabs)

    def test_empty_content(self, strategy: FixedChunkingStrategy) -> None:
        assert strategy.chunk("", ChunkConfig(target_size=10)) == []

    def test_short_content_is_one_slab(self, strategy: FixedChunkingStrategy) -> None:
        slabs = strategy.chunk("short", ChunkConfig(target_size=10, overlap=2))

        assert len(slabs) == 1
        assert slabs[0].text == "short"

    def test_whitespace_only_content_is_kept(self, strategy: FixedChunkingStrategy) -> None:
        slabs = strategy.chunk("   \n\t ", ChunkConfig(target_size=10))

        assert [s.text for s in slabs] == ["   \n\t "]

    def test_ignores_word_boundaries(self, strategy: FixedChunkingStrategy) -> None:
        slabs = strategy.chunk("hello world", ChunkConfig(target_size=4))

        assert [s.text for s in slabs] == ["hell", "o wo", "rld"]

    def test_configuration_checked_before_processing(self, strategy: FixedChunkingStrategy) -> None:
        # Arrange
        config = ChunkConfig(target_size=10, overlap=5)
        config.overlap = 10

        # Act & Assert
        with pytest.raises(OverlapConfigurationError):
            strategy.chunk("", config)

    def test_rechunking_a_slab_is_stable(self, strategy: FixedChunkingStrategy) -> None:
        config = ChunkConfig(target_size=100, overlap=10)
        slabs = strategy.chunk(alphabet(450), config)

        for slab in slabs:
            again = strategy.chunk(slab.text, config)
            assert [s.text for s in again] == [slab.text]

    @pytest.mark.parametrize("length", [0, 1, 99, 100, 101, 190, 191, 1000, 1234])
    def test_estimate_is_exact(self, strategy: FixedChunkingStrategy, length: int) -> None:
        config = ChunkConfig(target_size=100, overlap=10)

        assert strategy.estimate_chunks(length, config) == len(strategy.chunk(alphabet(length), config))

    def test_progress_reaches_completion(self, strategy: FixedChunkingStrategy) -> None:
        progress = MagicMock()

        strategy.chunk(alphabet(300), ChunkConfig(target_size=100), progress_callback=progress)

        reported = [call.args[0] for call in progress.call_args_list]
        assert reported[-1] == 100.0
        assert reported == sorted(reported)

    def test_name(self, strategy: FixedChunkingStrategy) -> None:
        assert strategy.name == "fixed"
        assert repr(strategy) == "FixedChunkingStrategy(name='fixed')"


@pytest.mark.asyncio()
async def test_fixed_chunking_async_delegates_to_sync() -> None:
    strategy = FixedChunkingStrategy()
    config = ChunkConfig(target_size=10)

    slabs = [MagicMock()]  # Sentinel return value

    with patch.object(strategy, "chunk", return_value=slabs) as mock_chunk:
        result = await strategy.chunk_async("sample text", config)

    mock_chunk.assert_called_once_with("sample text", config, None)
    assert result == slabs


@pytest.mark.asyncio()
async def test_fixed_chunking_async_matches_sync() -> None:
    strategy = FixedChunkingStrategy()
    config = ChunkConfig(target_size=100, overlap=20)
    content = alphabet(777)

    assert await strategy.chunk_async(content, config) == strategy.chunk(content, config)
