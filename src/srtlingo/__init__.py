from __future__ import annotations

from .config import SrtlingoConfig
from .pipeline import TranslationPipeline
from .state import TranslationState, TranslationStatus
from .translate.direction import TranslationDirection

__all__ = [
    "SrtlingoConfig",
    "TranslationPipeline",
    "TranslationState",
    "TranslationStatus",
    "TranslationDirection",
]

__version__ = "0.1.0"
