import math

import pytest

from srtlingo.subtitles import DEFAULT_CHUNK_SIZE, SubtitleBlock, chunk_blocks


def _blocks(count):
    return [SubtitleBlock(str(i), f"T{i}", f"text {i}") for i in range(1, count + 1)]


def test_sixty_five_blocks_in_batches_of_thirty():
    blocks = _blocks(65)

    batches = chunk_blocks(blocks, 30)

    assert [len(b) for b in batches] == [30, 30, 5]
    assert [block for batch in batches for block in batch] == blocks
    assert batches[1][0].index == "31"


@pytest.mark.parametrize("count,size", [(1, 1), (10, 3), (30, 30), (31, 30), (5, 100)])
def test_batch_count_and_concatenation(count, size):
    blocks = _blocks(count)

    batches = chunk_blocks(blocks, size)

    assert len(batches) == math.ceil(count / size)
    assert all(len(batch) <= size for batch in batches)
    assert sum(batches, []) == blocks


def test_no_blocks_no_batches():
    assert chunk_blocks([], 30) == []


def test_default_size_is_thirty():
    assert DEFAULT_CHUNK_SIZE == 30
    assert [len(b) for b in chunk_blocks(_blocks(61))] == [30, 30, 1]


@pytest.mark.parametrize("size", [0, -3])
def test_rejects_non_positive_size(size):
    with pytest.raises(ValueError):
        chunk_blocks(_blocks(3), size)
