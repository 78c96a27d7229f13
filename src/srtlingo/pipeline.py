from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from .errors import EmptyInputError
from .log import get_logger
from .state import TranslationState
from .subtitles import (
    DEFAULT_CHUNK_SIZE,
    SubtitleBlock,
    blocks_to_srt,
    chunk_blocks,
    parse_srt,
)
from .translate.direction import TranslationDirection
from .translate.translator import TranslationEngine

logger = get_logger(__name__)

# 批次之间的默认等待时间（秒），用于避开后端限流
DEFAULT_THROTTLE_SECONDS = 0.5

EMPTY_INPUT_MESSAGE = (
    "No subtitle lines found in the file. Ensure it's a valid .srt or .txt format."
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during translation."

ProgressCallback = Callable[[int], None]
StateListener = Callable[[TranslationState], None]


def batch_progress(done: int, total: int) -> int:
    """
    已完成批次对应的整数百分比，最后一批恰好为 100。

    统一向上取整而非四舍五入：65 条字幕、每批 30 条时依次报告 34 / 67 / 100，
    round() 对 1/3 会得到 33。其他批次数同样向上取整（1/7 为 15）。
    """
    return (100 * done + total - 1) // total


class TranslationPipeline:
    """
    字幕翻译主 Pipeline。

    解析 -> 分批 -> 逐批串行调用翻译引擎 -> 按位置合并译文 -> 重新生成 SRT。
    序号与时间轴始终取自原始解析结果，翻译引擎只接触文本。
    """

    def __init__(
        self,
        engine: TranslationEngine,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        throttle_seconds: float = DEFAULT_THROTTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        listener: Optional[StateListener] = None,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer, got {chunk_size}")
        self.engine = engine
        self.chunk_size = chunk_size
        self.throttle_seconds = max(0.0, throttle_seconds)
        self.sleep = sleep
        self.listener = listener

    def translate_blocks(
        self,
        blocks: Sequence[SubtitleBlock],
        direction: TranslationDirection,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[SubtitleBlock]:
        batches = chunk_blocks(blocks, self.chunk_size)
        total = len(batches)
        translated_blocks: List[SubtitleBlock] = []

        for batch_no, batch in enumerate(batches, start=1):
            if batch_no > 1 and self.throttle_seconds > 0:
                self.sleep(self.throttle_seconds)

            texts = [block.text for block in batch]
            logger.info(
                "翻译第 %d/%d 批（%d 条，%s）", batch_no, total, len(texts), direction.code
            )
            translations = self.engine.translate(texts, direction)
            translated_blocks.extend(self._merge_batch(batch, translations, batch_no))

            if on_progress is not None:
                on_progress(batch_progress(batch_no, total))

        return translated_blocks

    @staticmethod
    def _merge_batch(
        batch: Sequence[SubtitleBlock],
        translations: Sequence[str],
        batch_no: int,
    ) -> List[SubtitleBlock]:
        """
        按位置把译文写回字幕块；缺失或为空的位置保留原文。
        """
        merged: List[SubtitleBlock] = []
        missing = 0
        for pos, block in enumerate(batch):
            text = translations[pos] if pos < len(translations) else ""
            if not text:
                missing += 1
                merged.append(block)
                continue
            merged.append(replace(block, text=text))

        if missing:
            logger.warning(
                "第 %d 批有 %d/%d 条译文缺失，已保留原文", batch_no, missing, len(batch)
            )
        if len(translations) > len(batch):
            logger.warning(
                "第 %d 批返回了 %d 条译文，多于输入的 %d 条，多余部分已忽略",
                batch_no,
                len(translations),
                len(batch),
            )
        return merged

    def translate_document(
        self,
        content: str,
        direction: TranslationDirection,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """
        翻译整份 SRT 文本并返回新的 SRT 文本；任何错误直接向上抛出。
        """
        blocks = parse_srt(content)
        if not blocks:
            raise EmptyInputError(EMPTY_INPUT_MESSAGE)
        logger.info(
            "共解析到 %d 条字幕，按每批 %d 条翻译", len(blocks), self.chunk_size
        )
        translated = self.translate_blocks(blocks, direction, on_progress=on_progress)
        return blocks_to_srt(translated)

    def run(self, content: str, direction: TranslationDirection) -> TranslationState:
        """
        以状态机形式执行一次完整翻译，返回终态（SUCCEEDED 或 FAILED）。

        每次状态变化都会推送给 listener；失败时保留最后的 progress，不返回部分结果。
        """
        state = TranslationState.initial().start()
        self._emit(state)

        def on_progress(progress: int) -> None:
            nonlocal state
            state = state.advance(progress)
            self._emit(state)

        try:
            result = self.translate_document(content, direction, on_progress=on_progress)
        except Exception as exc:
            logger.exception("翻译失败: %s", exc)
            state = state.fail(str(exc) or UNEXPECTED_ERROR_MESSAGE)
        else:
            state = state.succeed(result)
        self._emit(state)
        return state

    def _emit(self, state: TranslationState) -> None:
        if self.listener is not None:
            self.listener(state)
