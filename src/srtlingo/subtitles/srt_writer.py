from __future__ import annotations

from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Iterable

from .types import SubtitleBlock

if TYPE_CHECKING:
    from srtlingo.translate.direction import TranslationDirection


def blocks_to_srt(blocks: Iterable[SubtitleBlock]) -> str:
    """
    将字幕块序列重新拼接为 SRT 文本。

    每个块输出为「序号、时间轴、文本」加一个换行，块之间以单个空行分隔；
    空序列返回空字符串。
    """
    return "\n".join(
        f"{block.index}\n{block.timecode}\n{block.text}\n" for block in blocks
    )


def write_srt(blocks: Iterable[SubtitleBlock], path: str | Path) -> Path:
    return write_srt_text(blocks_to_srt(blocks), path)


def write_srt_text(srt_text: str, path: str | Path) -> Path:
    out_path = Path(path).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(srt_text, encoding="utf-8")
    return out_path


def translated_filename(source_name: str, direction: "TranslationDirection") -> str:
    """
    生成译文文件名：{原文件名去扩展名}_translated_{方向代码}.srt
    """
    stem = PurePath(source_name).stem or source_name
    return f"{stem}_translated_{direction.code}.srt"
