from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .errors import StateTransitionError


class TranslationStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TranslationState:
    """
    单次翻译任务的进度/结果记录。

    状态迁移：IDLE -> RUNNING -> {SUCCEEDED, FAILED}。
    每个迁移函数都返回新的状态对象；终态只会携带 result 或 error 之一。
    """

    status: TranslationStatus = TranslationStatus.IDLE
    progress: int = 0
    error: Optional[str] = None
    result: Optional[str] = None

    @property
    def is_translating(self) -> bool:
        return self.status is TranslationStatus.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.status in {TranslationStatus.SUCCEEDED, TranslationStatus.FAILED}

    @classmethod
    def initial(cls) -> "TranslationState":
        return cls()

    def reset(self) -> "TranslationState":
        """选择了新的源文件：回到初始状态。"""
        return TranslationState.initial()

    def start(self) -> "TranslationState":
        if self.is_translating:
            raise StateTransitionError("translation is already running")
        return TranslationState(status=TranslationStatus.RUNNING)

    def advance(self, progress: int) -> "TranslationState":
        self._require_running("advance")
        if not 0 <= progress <= 100:
            raise StateTransitionError(f"progress must be within [0, 100], got {progress}")
        if progress < self.progress:
            raise StateTransitionError(
                f"progress must not decrease (current {self.progress}, got {progress})"
            )
        return replace(self, progress=progress)

    def succeed(self, result: str) -> "TranslationState":
        self._require_running("succeed")
        return replace(self, status=TranslationStatus.SUCCEEDED, result=result, error=None)

    def fail(self, message: str) -> "TranslationState":
        # 保留最后的 progress，便于展示失败位置
        self._require_running("fail")
        return replace(self, status=TranslationStatus.FAILED, error=message, result=None)

    def _require_running(self, action: str) -> None:
        if not self.is_translating:
            raise StateTransitionError(
                f"cannot {action} a translation in state {self.status.value!r}"
            )
