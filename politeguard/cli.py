"""Command-line entry point.

Usage:
  politeguard devices
  politeguard analyze "Thanks so much for your patience!" "Read the docs."
  politeguard analyze --device CUDA "Happy to help."
  politeguard watch --debounce-ms 300 < drafts.txt

Env:
  POLITE_MODEL_PATH=models/polite-guard/model.onnx
  POLITE_BACKEND=onnx|torch
  POLITE_DEVICE=CPU
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from politeguard.config import (
    POLITE_BACKEND,
    POLITE_DEBOUNCE_MS,
    POLITE_DEVICE,
    POLITE_MODEL_PATH,
    SUPPORTED_BACKENDS,
)
from politeguard.errors import PolitenessError
from politeguard.logging import configure_logging
from politeguard.runtime import RuntimeDeps, build_runtime_deps
from politeguard.state import AnalysisSnapshot

logger = logging.getLogger(__name__)


def _add_runtime_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--model",
        default=POLITE_MODEL_PATH,
        help=f"ONNX file or checkpoint directory (default env POLITE_MODEL_PATH or {POLITE_MODEL_PATH})",
    )
    parser.add_argument(
        "--backend",
        choices=SUPPORTED_BACKENDS,
        default=POLITE_BACKEND,
        help=f"Classifier runtime (default: {POLITE_BACKEND})",
    )
    parser.add_argument(
        "--device",
        default=POLITE_DEVICE,
        help="Device id or name (default env POLITE_DEVICE, else first enumerated)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level override (default env APP_LOG_LEVEL)",
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="politeguard",
        description="Classify customer-support replies into politeness tiers",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    devices = commands.add_parser("devices", help="List devices the runtime can bind")
    _add_runtime_args(devices)

    analyze = commands.add_parser("analyze", help="Analyze one or more texts")
    _add_runtime_args(analyze)
    analyze.add_argument("texts", nargs="+", help="Texts to classify")

    watch = commands.add_parser("watch", help="Treat each stdin line as a text edit (debounced)")
    _add_runtime_args(watch)
    watch.add_argument(
        "--debounce-ms",
        type=float,
        default=POLITE_DEBOUNCE_MS,
        help=f"Quiet period before inference (default: {POLITE_DEBOUNCE_MS:.0f})",
    )
    return parser.parse_args(argv)


def _format_snapshot(snapshot: AnalysisSnapshot) -> str:
    parts = [f"gen={snapshot.generation}"]
    if snapshot.status:
        parts.append(f"status={snapshot.status!r}")
    if snapshot.level:
        parts.append(f"level={snapshot.level}")
    if snapshot.elapsed_ms:
        parts.append(f"elapsed={snapshot.elapsed_ms}")
    if len(parts) == 1:
        parts.append("cleared")
    return " ".join(parts)


async def _run_devices(deps: RuntimeDeps) -> int:
    devices = await deps.service.list_devices()
    for index, device in enumerate(devices):
        print(f"[{index}] {device.name:<24} {device.backend}:{device.device_id}")
    return 0


async def _run_analyze(deps: RuntimeDeps, texts: list[str]) -> int:
    bound = await deps.service.initialize()
    print(f"device: {bound}")
    for text in texts:
        result = await deps.service.analyze(text)
        confidence = f"{result.confidence:.3f}" if result.confidence is not None else "-"
        print(f"{result.level.display_name:<16} conf={confidence} {result.elapsed_ms:>5} ms  {text[:60]!r}")
        print(f"  {result.description}")
    return 0


async def _run_watch(deps: RuntimeDeps) -> int:
    unsubscribe = deps.view.subscribe(lambda snap: print(_format_snapshot(snap), flush=True))
    deps.analyzer.start()
    try:
        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            deps.analyzer.on_text_changed(line.rstrip("\n"))
        await deps.analyzer.wait_idle()
    finally:
        unsubscribe()
    return 0


async def _main_async(args: argparse.Namespace) -> int:
    deps = await build_runtime_deps(
        model_path=args.model,
        backend_kind=args.backend,
        device=args.device,
        debounce_ms=getattr(args, "debounce_ms", None),
    )
    try:
        if args.command == "devices":
            return await _run_devices(deps)
        if args.command == "analyze":
            return await _run_analyze(deps, args.texts)
        return await _run_watch(deps)
    finally:
        await deps.shutdown()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)
    try:
        return asyncio.run(_main_async(args))
    except PolitenessError as exc:
        logger.error("politeguard: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
