from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class TranslationDirection(Enum):
    """
    翻译方向：只有「英语 -> 波斯语」与「波斯语 -> 英语」两种取值。

    枚举值即方向代码，用于输出文件名与命令行/表单参数。
    """

    EN_TO_FA = "en-fa"
    FA_TO_EN = "fa-en"

    @property
    def code(self) -> str:
        return self.value

    @property
    def source_language(self) -> str:
        return _LANGUAGE_PAIRS[self][0]

    @property
    def target_language(self) -> str:
        return _LANGUAGE_PAIRS[self][1]

    def reversed(self) -> "TranslationDirection":
        if self is TranslationDirection.EN_TO_FA:
            return TranslationDirection.FA_TO_EN
        return TranslationDirection.EN_TO_FA

    @classmethod
    def from_code(cls, code: str) -> "TranslationDirection":
        key = (code or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown translation direction: {code!r} (expected one of: {choices})")


_LANGUAGE_PAIRS: Dict[TranslationDirection, Tuple[str, str]] = {
    TranslationDirection.EN_TO_FA: ("English", "Persian"),
    TranslationDirection.FA_TO_EN: ("Persian", "English"),
}
