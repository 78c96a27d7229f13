from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    配置根 logger：始终输出到 stdout，指定 log_file 时额外写入 UTF-8 文件。

    level 未显式传入时读取环境变量 SRTLINGO_LOG_LEVEL（默认 INFO）。
    """
    level_name = (level or os.getenv("SRTLINGO_LOG_LEVEL", "INFO") or "INFO").upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
