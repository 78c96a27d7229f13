from __future__ import annotations

"""
srtlingo Web 子模块

提供基于 FastAPI 的轻量 Web API：上传字幕、同步翻译、下载结果。
"""

from .app import app, create_app, main

__all__ = ["app", "create_app", "main"]
