from __future__ import annotations

from .types import SubtitleBlock
from .srt_parser import parse_srt, read_srt
from .srt_writer import blocks_to_srt, translated_filename, write_srt, write_srt_text
from .chunker import DEFAULT_CHUNK_SIZE, chunk_blocks

__all__ = [
    "SubtitleBlock",
    "parse_srt",
    "read_srt",
    "blocks_to_srt",
    "write_srt",
    "write_srt_text",
    "translated_filename",
    "DEFAULT_CHUNK_SIZE",
    "chunk_blocks",
]
