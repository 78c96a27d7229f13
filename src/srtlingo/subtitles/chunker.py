from __future__ import annotations

from typing import List, Sequence

from .types import SubtitleBlock

# 每次调用翻译服务时发送的字幕块数量
DEFAULT_CHUNK_SIZE = 30


def chunk_blocks(
    blocks: Sequence[SubtitleBlock],
    size: int = DEFAULT_CHUNK_SIZE,
) -> List[List[SubtitleBlock]]:
    """
    按固定大小把字幕块切分为连续、保序的若干批次。

    最后一批可能不足 size 条；输入为空时返回空列表。
    """
    if size < 1:
        raise ValueError(f"chunk size must be a positive integer, got {size}")
    return [list(blocks[start:start + size]) for start in range(0, len(blocks), size)]
