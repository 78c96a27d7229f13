from __future__ import annotations

import os
import shutil
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, UploadFile, File, Form
from fastapi.responses import JSONResponse, FileResponse

from srtlingo.env import load_dotenv_if_present
from srtlingo.config import SrtlingoConfig
from srtlingo.log import get_logger
from srtlingo.pipeline import TranslationPipeline
from srtlingo.state import TranslationStatus
from srtlingo.subtitles import parse_srt
from srtlingo.translate.direction import TranslationDirection
from srtlingo.translate.factory import get_translation_engine
from srtlingo.translate.translator import TranslationEngine
from .dependencies import (
    run_pipeline_for_web,
    create_job_dir,
    get_web_jobs_root,
    cleanup_old_jobs,
    write_job_meta,
    load_job_meta,
    list_jobs,
)

logger = get_logger(__name__)

EngineFactory = Callable[[str], TranslationEngine]

DEFAULT_INPUT_NAME = "subtitles.srt"


def _max_upload_bytes() -> tuple[int, int]:
    max_mb_env = os.getenv("SRTLINGO_WEB_MAX_UPLOAD_MB", "10")
    try:
        max_mb = int(max_mb_env)
    except ValueError:
        max_mb = 10
    return max_mb, max_mb * 1024 * 1024


def _safe_input_name(filename: str) -> str:
    # 只取文件名部分；"." / ".." 会指向目录本身
    name = os.path.basename(filename.replace("\\", "/"))
    if name in ("", ".", ".."):
        return DEFAULT_INPUT_NAME
    return name


def create_app(engine_factory: Optional[EngineFactory] = None) -> FastAPI:
    """
    创建并配置 FastAPI 应用。

    - 加载 .env 环境变量；
    - engine_factory 按引擎名称构造翻译引擎，默认使用 get_translation_engine；
    - 注册健康检查、任务提交、任务列表与下载路由。
    """
    load_dotenv_if_present()
    make_engine: EngineFactory = engine_factory or get_translation_engine

    app = FastAPI(
        title="srtlingo Web",
        description="srtlingo Web API: 上传 SRT 字幕并翻译。",
    )

    # 启动时尝试清理一次过期任务目录
    cleanup_old_jobs()

    @app.get("/health", response_class=JSONResponse)
    async def health() -> dict[str, str]:
        """
        简单健康检查，用于部署与监控。
        """
        return {"status": "ok"}

    @app.get("/api/jobs", response_class=JSONResponse)
    async def list_jobs_api(limit: int = 20) -> JSONResponse:
        return JSONResponse({"jobs": list_jobs(limit=limit)})

    @app.post("/api/jobs", response_class=JSONResponse)
    def create_job_api(
        file: UploadFile = File(...),
        direction: str = Form(TranslationDirection.EN_TO_FA.code),
    ) -> JSONResponse:
        """
        创建一个新的字幕翻译任务。

        - 接收上传的字幕文件与翻译方向；
        - 同步执行 Pipeline（逐批串行调用翻译服务）；
        - 返回任务信息、进度历史与下载链接。
        """
        if not file.filename:
            raise HTTPException(status_code=400, detail="No file selected for upload.")
        try:
            direction_value = TranslationDirection.from_code(direction)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        # 每次请求前尝试清理过期任务
        cleanup_old_jobs()

        job_id, job_dir = create_job_dir()
        input_name = _safe_input_name(file.filename)
        input_path = job_dir / input_name

        max_mb, max_bytes = _max_upload_bytes()
        copied = 0
        chunk_size = 1024 * 1024
        with input_path.open("wb") as f_out:
            while True:
                chunk = file.file.read(chunk_size)
                if not chunk:
                    break
                copied += len(chunk)
                if copied > max_bytes:
                    break
                f_out.write(chunk)
        if copied > max_bytes:
            shutil.rmtree(job_dir, ignore_errors=True)
            raise HTTPException(
                status_code=413,
                detail=f"Uploaded file exceeds the {max_mb} MB limit.",
            )

        try:
            content = input_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            shutil.rmtree(job_dir, ignore_errors=True)
            raise HTTPException(
                status_code=400,
                detail="Subtitle file must be UTF-8 encoded text.",
            ) from exc

        try:
            config = SrtlingoConfig.from_paths(input_path=input_path, direction=direction_value)
            pipeline = TranslationPipeline(
                make_engine(config.translation_engine),
                chunk_size=config.chunk_size,
                throttle_seconds=config.throttle_seconds,
            )
            state, history = run_pipeline_for_web(pipeline, content, direction_value)
            if state.status is TranslationStatus.SUCCEEDED and state.result is not None:
                config.output_path.write_text(state.result, encoding="utf-8")
                output_name: str | None = config.output_path.name
            else:
                output_name = None
            write_job_meta(job_id, job_dir, input_name, direction_value, state, output_name)
        except Exception as exc:
            # 引擎构造失败等配置问题，统一以 JSON 错误返回
            logger.exception("任务 %s 执行失败", job_id)
            return JSONResponse(
                {"error": str(exc), "job_id": job_id, "progress": 0},
                status_code=500,
            )

        if output_name is None:
            return JSONResponse(
                {"error": state.error, "job_id": job_id, "progress": state.progress},
                status_code=500,
            )

        return JSONResponse(
            {
                "job_id": job_id,
                "input_name": input_name,
                "direction": direction_value.code,
                "status": state.status.value,
                "progress": state.progress,
                "progress_history": history,
                "block_count": len(parse_srt(state.result)),
                "output_name": output_name,
                "download_url": f"/download/{job_id}",
            }
        )

    @app.get("/download/{job_id}", name="download_file")
    async def download_file(job_id: str) -> FileResponse:
        """
        下载翻译完成的字幕文件。
        """
        job_dir = get_web_jobs_root() / job_id
        if not job_dir.is_dir():
            raise HTTPException(status_code=404, detail="Job not found or already cleaned up.")

        meta = load_job_meta(job_dir)
        output_name = meta.get("output_name") if meta else None
        if not output_name:
            raise HTTPException(status_code=404, detail="Job has no translated output.")

        path = job_dir / output_name
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Translated file does not exist.")

        return FileResponse(
            path,
            media_type="text/plain; charset=utf-8",
            filename=path.name,
        )

    return app


# 供 uvicorn 等 ASGI 服务器直接引用
app = create_app()


def main() -> None:
    """
    本地启动 Web 服务的入口。

    可通过环境变量控制监听地址与端口：
      - SRTLINGO_WEB_HOST（默认 127.0.0.1）
      - SRTLINGO_WEB_PORT（默认 8000）
    """
    import uvicorn

    host = os.getenv("SRTLINGO_WEB_HOST", "127.0.0.1")
    port_str = os.getenv("SRTLINGO_WEB_PORT", "8000")
    try:
        port = int(port_str)
    except ValueError:
        port = 8000

    uvicorn.run("srtlingo.web.app:app", host=host, port=port, reload=False)
