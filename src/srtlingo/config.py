from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

from .pipeline import DEFAULT_THROTTLE_SECONDS
from .subtitles import DEFAULT_CHUNK_SIZE, translated_filename
from .translate.direction import TranslationDirection

DEFAULT_TRANSLATION_ENGINE = "gemini"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


@dataclass
class SrtlingoConfig:
    """
    一次字幕翻译任务的配置。

    未显式传入的可选项从环境变量读取（可写在 .env 中）：
      - SRTLINGO_TRANSLATION_ENGINE   # gemini / llm，默认 gemini
      - SRTLINGO_CHUNK_SIZE           # 每批字幕条数，默认 30
      - SRTLINGO_THROTTLE_SECONDS     # 批次间等待秒数，默认 0.5
    """

    input_path: Path
    output_path: Path
    direction: TranslationDirection = TranslationDirection.EN_TO_FA
    translation_engine: str = DEFAULT_TRANSLATION_ENGINE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    throttle_seconds: float = DEFAULT_THROTTLE_SECONDS

    @classmethod
    def from_paths(
        cls,
        input_path: str | Path,
        output_path: Optional[str | Path] = None,
        direction: TranslationDirection | str = TranslationDirection.EN_TO_FA,
        translation_engine: Optional[str] = None,
        chunk_size: Optional[int] = None,
        throttle_seconds: Optional[float] = None,
    ) -> "SrtlingoConfig":
        input_path_obj = Path(input_path).expanduser().resolve()

        if isinstance(direction, str):
            direction_value = TranslationDirection.from_code(direction)
        else:
            direction_value = direction

        if output_path is not None:
            output_path_obj = Path(output_path).expanduser().resolve()
        else:
            output_path_obj = input_path_obj.with_name(
                translated_filename(input_path_obj.name, direction_value)
            )

        if translation_engine is None:
            engine_value = (
                os.getenv("SRTLINGO_TRANSLATION_ENGINE", "").strip().lower()
                or DEFAULT_TRANSLATION_ENGINE
            )
        else:
            engine_value = translation_engine.strip().lower()

        if chunk_size is None:
            chunk_size_value = _env_int("SRTLINGO_CHUNK_SIZE", DEFAULT_CHUNK_SIZE)
        elif chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer, got {chunk_size}")
        else:
            chunk_size_value = chunk_size

        if throttle_seconds is None:
            throttle_value = _env_float("SRTLINGO_THROTTLE_SECONDS", DEFAULT_THROTTLE_SECONDS)
        else:
            throttle_value = max(0.0, throttle_seconds)

        return cls(
            input_path=input_path_obj,
            output_path=output_path_obj,
            direction=direction_value,
            translation_engine=engine_value,
            chunk_size=chunk_size_value,
            throttle_seconds=throttle_value,
        )
