from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .env import load_dotenv_if_present
from .config import SrtlingoConfig
from .log import setup_logging
from .pipeline import TranslationPipeline
from .state import TranslationState, TranslationStatus
from .subtitles import write_srt_text
from .translate.direction import TranslationDirection
from .translate.factory import TRANSLATION_ENGINES, get_translation_engine


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srtlingo",
        description="srtlingo: 分批调用 LLM 翻译 SRT 字幕，保留原有序号与时间轴。",
    )
    parser.add_argument(
        "input",
        type=str,
        help="输入 SRT（或同格式 TXT）字幕文件路径。",
    )
    parser.add_argument(
        "--direction",
        type=str,
        choices=[d.code for d in TranslationDirection],
        default=TranslationDirection.EN_TO_FA.code,
        help="翻译方向：en-fa（英语 -> 波斯语）/ fa-en（波斯语 -> 英语）。",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="输出文件路径（默认: 与输入同目录，文件名为 <原名>_translated_<方向>.srt）。",
    )
    parser.add_argument(
        "--translation-engine",
        type=str,
        choices=list(TRANSLATION_ENGINES),
        default=None,
        help="翻译引擎：gemini / llm。默认读取环境变量 SRTLINGO_TRANSLATION_ENGINE，否则为 gemini。",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="每次请求发送的字幕条数（默认: 30，可通过 SRTLINGO_CHUNK_SIZE 配置）。",
    )
    parser.add_argument(
        "--throttle",
        type=float,
        default=None,
        help="批次之间的等待秒数（默认: 0.5，可通过 SRTLINGO_THROTTLE_SECONDS 配置）。",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="日志级别（DEBUG / INFO / WARNING ...），默认读取 SRTLINGO_LOG_LEVEL。",
    )
    return parser


def _print_state(state: TranslationState) -> None:
    if state.status is TranslationStatus.RUNNING:
        print(f"   进度: {state.progress}%")


def main(argv: list[str] | None = None) -> int:
    # 确保在解析参数和使用配置之前加载 .env 中的环境变量
    load_dotenv_if_present()
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = SrtlingoConfig.from_paths(
            input_path=args.input,
            output_path=args.output,
            direction=args.direction,
            translation_engine=args.translation_engine,
            chunk_size=args.chunk_size,
            throttle_seconds=args.throttle,
        )
        content = config.input_path.read_text(encoding="utf-8-sig")
        engine = get_translation_engine(config.translation_engine)
        pipeline = TranslationPipeline(
            engine,
            chunk_size=config.chunk_size,
            throttle_seconds=config.throttle_seconds,
            listener=_print_state,
        )
        direction = config.direction
        print(f"开始翻译: {direction.source_language} -> {direction.target_language}")
        state = pipeline.run(content, direction)
        if state.status is not TranslationStatus.SUCCEEDED or state.result is None:
            print(f"翻译失败: {state.error}")
            return 1

        out_path = write_srt_text(state.result, config.output_path)
        print("字幕翻译完成")
        print(f"   输入: {Path(args.input)}")
        print(f"   输出: {out_path}")
        print(f"   引擎: {config.translation_engine}")
        return 0
    except KeyboardInterrupt:
        print("\n用户中断")
        return 1
    except Exception as exc:
        print(f"处理失败: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
