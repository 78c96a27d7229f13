from __future__ import annotations

"""
Web 层与核心 Pipeline 之间的集成点。

负责任务目录管理与任务元信息读写，翻译本身仍由 TranslationPipeline 完成。
"""

from typing import List, Tuple, Dict, Any
from pathlib import Path
import os
import uuid
import shutil
import time
import json
from datetime import datetime

from srtlingo.log import get_logger
from srtlingo.pipeline import TranslationPipeline
from srtlingo.state import TranslationState
from srtlingo.translate.direction import TranslationDirection

logger = get_logger(__name__)


def run_pipeline_for_web(
    pipeline: TranslationPipeline,
    content: str,
    direction: TranslationDirection,
) -> Tuple[TranslationState, List[int]]:
    """
    Web 入口的高层封装：执行一次翻译并记录进度变化。

    返回 (终态, 进度历史)。
    """
    history: List[int] = []
    previous_listener = pipeline.listener

    def record(state: TranslationState) -> None:
        if state.is_translating and (not history or history[-1] != state.progress):
            history.append(state.progress)
        if previous_listener is not None:
            previous_listener(state)

    pipeline.listener = record
    try:
        state = pipeline.run(content, direction)
    finally:
        pipeline.listener = previous_listener
    return state, history


def get_web_jobs_root() -> Path:
    """
    获取 Web 任务工作目录根路径。

    默认使用当前工作目录下的 exports/web_jobs，可通过
    SRTLINGO_WEB_JOBS_DIR 环境变量覆盖。
    """
    root_env = os.getenv("SRTLINGO_WEB_JOBS_DIR")
    if root_env:
        root = Path(root_env).expanduser().resolve()
    else:
        root = Path.cwd() / "exports" / "web_jobs"
    root.mkdir(parents=True, exist_ok=True)
    return root


def create_job_dir() -> Tuple[str, Path]:
    """
    创建一个新的任务目录并返回 (job_id, job_dir)。
    """
    jobs_root = get_web_jobs_root()
    job_id = uuid.uuid4().hex[:8]
    job_dir = jobs_root / job_id
    job_dir.mkdir(parents=True, exist_ok=False)
    return job_id, job_dir


def cleanup_old_jobs(ttl_hours: float | None = None) -> None:
    """
    清理超过 TTL 的历史任务目录。

    - 默认 TTL 通过环境变量 SRTLINGO_WEB_JOBS_TTL_HOURS 控制（小时，默认 12）；
    - 设置为 0 或负数时不执行清理。
    """
    if ttl_hours is None:
        ttl_env = os.getenv("SRTLINGO_WEB_JOBS_TTL_HOURS", "12")
        try:
            ttl_hours = float(ttl_env)
        except ValueError:
            ttl_hours = 12.0

    if ttl_hours <= 0:
        return

    jobs_root = get_web_jobs_root()
    now = time.time()
    ttl_seconds = ttl_hours * 3600.0

    for entry in jobs_root.iterdir():
        if not entry.is_dir():
            continue
        try:
            mtime = entry.stat().st_mtime
        except OSError:
            continue
        if now - mtime > ttl_seconds:
            logger.info("清理过期任务目录: %s", entry.name)
            shutil.rmtree(entry, ignore_errors=True)


def write_job_meta(
    job_id: str,
    job_dir: Path,
    input_name: str,
    direction: TranslationDirection,
    state: TranslationState,
    output_name: str | None,
) -> None:
    """
    将任务的基本元信息写入 job.json，便于任务列表与下载接口使用。
    """
    meta_path = job_dir / "job.json"
    created_at = datetime.now().isoformat(timespec="seconds")
    data: Dict[str, Any] = {
        "job_id": job_id,
        "input_name": input_name,
        "created_at": created_at,
        "direction": direction.code,
        "status": state.status.value,
        "progress": state.progress,
        "error": state.error,
        "output_name": output_name,
    }
    try:
        meta_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as exc:
        # 元信息写入失败不应影响主流程
        logger.warning("写入任务元信息失败 (%s): %s", job_id, exc)


def load_job_meta(job_dir: Path) -> Dict[str, Any] | None:
    """
    从任务目录读取 job.json，如果不存在或损坏则返回 None。
    """
    meta_path = job_dir / "job.json"
    if not meta_path.is_file():
        return None
    try:
        text = meta_path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def list_jobs(limit: int = 20) -> List[Dict[str, Any]]:
    """
    列出最近的若干任务（按创建时间倒序）。
    """
    jobs_root = get_web_jobs_root()
    records: List[Dict[str, Any]] = []
    for entry in jobs_root.iterdir():
        if not entry.is_dir():
            continue
        meta = load_job_meta(entry)
        if not meta:
            continue
        records.append(
            {
                "job_id": str(meta.get("job_id") or entry.name),
                "input_name": meta.get("input_name") or "",
                "created_at": meta.get("created_at") or "",
                "direction": meta.get("direction"),
                "status": meta.get("status"),
                "progress": meta.get("progress"),
            }
        )
    # 按 created_at 字符串倒序排序（ISO 格式可直接比较）
    records.sort(key=lambda r: r.get("created_at") or "", reverse=True)
    if limit > 0:
        records = records[:limit]
    return records
