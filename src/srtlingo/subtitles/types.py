from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SubtitleBlock:
    """
    单条字幕块，对应 SRT 中的「序号 / 时间轴 / 文本」三段。

    index 与 timecode 均为不透明字符串，原样透传，不做解析或校验；
    text 可以包含多行。
    """

    index: str
    timecode: str
    text: str
