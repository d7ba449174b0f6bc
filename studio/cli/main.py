"""
Audiobook Studio CLI
====================
Terminal-first command surface for queueing simulated conversions.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import math
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from config.voices import LANGUAGES, VOICES
from studio.app.config import AppConfig
from studio.app.controller import StudioController
from studio.app.events import AppEvent, EventType
from studio.errors import CANCELLED_BY_USER, StudioError
from studio.ingestion import accept_files, file_input_from_path, validate_pasted_text
from studio.models import FileInput, JobStage

ControllerFactory = Callable[[AppConfig], StudioController]


def non_negative_float(value: str) -> float:
    """argparse type for durations and time scales."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the root CLI parser."""
    parser = argparse.ArgumentParser(prog="studio", description="Audiobook Studio CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run
    run_parser = subparsers.add_parser("run", help="Queue documents and run the conversion simulation")
    run_parser.add_argument("sources", nargs="*", type=Path, help="TXT, PDF, EPUB or DOCX files")
    run_parser.add_argument("--pages", type=int, help="Page count to assume for each file")
    run_parser.add_argument("--text", type=Path, help="Text file to add as pasted text")
    run_parser.add_argument("--text-title", help="Title for the pasted text")
    run_parser.add_argument(
        "--time-scale",
        type=non_negative_float,
        default=1.0,
        help="Multiplier for simulated stage durations (default: 1.0)",
    )
    run_parser.add_argument(
        "--cancel-after",
        type=non_negative_float,
        help="Cancel every unfinished job after this many seconds",
    )
    run_parser.add_argument(
        "--format",
        choices=["mp3", "m4b"],
        default="mp3",
        help="Output format (default: mp3)",
    )
    run_parser.set_defaults(handler=handle_run)

    # estimate
    estimate_parser = subparsers.add_parser("estimate", help="Estimate narration time and cost")
    estimate_parser.add_argument("sources", nargs="+", type=Path, help="Documents to price")
    estimate_parser.add_argument("--pages", type=int, help="Page count to assume for each file")
    estimate_parser.set_defaults(handler=handle_estimate)

    # voices
    voices_parser = subparsers.add_parser("voices", help="List voices and languages")
    voices_parser.set_defaults(handler=handle_voices)

    return parser


def _print(msg: str, out: TextIO) -> None:
    out.write(msg + "\n")
    out.flush()


def _describe(path: Path, pages: Optional[int], config: AppConfig) -> FileInput:
    item = file_input_from_path(path, pages=pages)
    if item.pages is None and item.content is not None:
        item = FileInput(
            name=item.name,
            size=item.size,
            mime_type=item.mime_type,
            pages=math.ceil(len(item.content) / config.text_chars_per_page),
            content=item.content,
        )
    return item


def _add_sources(args: argparse.Namespace, controller: StudioController, out: TextIO) -> bool:
    """Add accepted files to the controller. Returns False on a missing path."""
    inputs = []
    for source in args.sources:
        path = source.expanduser().resolve()
        if not path.exists():
            _print(f"error: source file not found: {path}", out)
            return False
        inputs.append(_describe(path, args.pages, controller.config))

    result = accept_files(
        inputs,
        max_files=controller.config.max_files,
        max_bytes=controller.config.max_file_bytes,
    )
    for error in result.rejected:
        _print(f"rejected: {error}", out)
    controller.add_documents(result.accepted)
    return True


def handle_run(args: argparse.Namespace, controller: StudioController, out: TextIO) -> int:
    """Queue every document and stream stage changes to the terminal."""
    if not _add_sources(args, controller, out):
        return 1

    if args.text is not None:
        text_path = args.text.expanduser().resolve()
        if not text_path.exists():
            _print(f"error: source file not found: {text_path}", out)
            return 1
        title = args.text_title or text_path.stem
        content = text_path.read_text(encoding="utf-8")
        try:
            validate_pasted_text(title, content)
        except StudioError as exc:
            _print(f"error: {exc}", out)
            return 1
        controller.add_pasted_text(content, title)

    if not controller.documents:
        _print("error: nothing to convert", out)
        return 1

    controller.update_output_settings(format=args.format)
    return asyncio.run(_run_jobs(args, controller, out))


async def _run_jobs(args: argparse.Namespace, controller: StudioController, out: TextIO) -> int:
    def on_event(event: AppEvent) -> None:
        if event.event_type != EventType.STATE or event.stage is None:
            return
        job = controller.get_job(event.job_id)
        if job is None:
            return
        eta = f" (eta {job.eta})" if job.eta else ""
        _print(f"[{job.document_name}] {job.stage.value} {job.progress:3d}% {event.message}{eta}", out)

    unsubscribe = controller.subscribe(on_event)
    try:
        job_ids = controller.start_all()
        _print(f"started {len(job_ids)} job(s)", out)

        if args.cancel_after is not None:
            await controller.scheduler.sleep(args.cancel_after)
            for job_id in job_ids:
                controller.cancel_job(job_id)

        await controller.wait_idle()
    finally:
        unsubscribe()
        await controller.aclose()

    jobs = [controller.get_job(job_id) for job_id in job_ids]
    completed = [job for job in jobs if job and job.stage == JobStage.COMPLETED]
    cancelled = [job for job in jobs if job and job.error == CANCELLED_BY_USER]

    for job in completed:
        _print(f"ready: {job.document_name} -> {job.download_url}", out)
    _print(f"{len(completed)}/{len(jobs)} job(s) completed", out)

    if len(completed) == len(jobs):
        return 0
    if cancelled:
        return 130
    return 1


def handle_estimate(args: argparse.Namespace, controller: StudioController, out: TextIO) -> int:
    """Print the estimate for a set of documents."""
    if not _add_sources(args, controller, out):
        return 1

    estimate = controller.get_estimate()
    _print(f"documents: {len(controller.documents)}", out)
    _print(f"estimated time: {estimate.time_text}", out)
    _print(f"estimated cost: {estimate.cost_text}", out)
    return 0


def handle_voices(args: argparse.Namespace, controller: StudioController, out: TextIO) -> int:  # noqa: ARG001
    """List voice presets and narration languages."""
    _print("voices:", out)
    for voice in VOICES.values():
        _print(f"  - {voice.id}: {voice.name} ({voice.accent} {voice.gender})", out)
    _print("languages:", out)
    for language in LANGUAGES:
        _print(f"  - {language.code}: {language.name}", out)
    return 0


def _default_factory(config: AppConfig) -> StudioController:
    return StudioController(config=config)


def main(
    argv: Optional[list[str]] = None,
    controller_factory: ControllerFactory = _default_factory,
    out: TextIO = sys.stdout,
) -> int:
    """
    CLI entrypoint.

    Args:
        argv: Optional argv override for testing.
        controller_factory: Dependency-injection hook for tests.
        out: Output stream.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(file=out)
        return 2

    config = AppConfig(time_scale=getattr(args, "time_scale", 1.0))
    controller = controller_factory(config)
    try:
        return int(handler(args, controller, out))
    except StudioError as exc:
        _print(f"error: {exc}", out)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
