from __future__ import annotations

import re
from pathlib import Path
from typing import List

from srtlingo.log import get_logger

from .types import SubtitleBlock

logger = get_logger(__name__)

# 一个或多个空行（仅含空白字符的行也视为空行）
_BLANK_LINES_RE = re.compile(r"\n(?:[ \t]*\n)+")


def _normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").replace("\r", "\n")


def parse_srt(content: str) -> List[SubtitleBlock]:
    """
    将 SRT 文本解析为有序的字幕块列表。

    - 统一换行符后按空行切分候选块；
    - 每个候选块至少 3 行：第 1 行为序号，第 2 行为时间轴，其余行为文本；
    - 任一字段为空的候选块会被直接丢弃；
    - 没有解析出任何字幕块时返回空列表，由调用方决定如何处理。
    """
    normalized = _normalize_newlines(content).strip()
    if not normalized:
        return []

    blocks: List[SubtitleBlock] = []
    for raw in _BLANK_LINES_RE.split(normalized):
        lines = raw.split("\n")
        if len(lines) < 3:
            logger.debug("跳过不完整的字幕块: %r", raw[:80])
            continue
        index = lines[0].strip()
        timecode = lines[1].strip()
        text = "\n".join(lines[2:]).strip()
        if not (index and timecode and text):
            logger.debug("跳过字段为空的字幕块: %r", raw[:80])
            continue
        blocks.append(SubtitleBlock(index=index, timecode=timecode, text=text))
    return blocks


def read_srt(path: str | Path) -> List[SubtitleBlock]:
    """读取 UTF-8（允许 BOM）编码的字幕文件并解析。"""
    in_path = Path(path).expanduser().resolve()
    return parse_srt(in_path.read_text(encoding="utf-8-sig"))
