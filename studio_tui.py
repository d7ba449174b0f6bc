#!/usr/bin/env python3
"""
Audiobook Studio TUI launcher.

Usage:
    python studio_tui.py
    python studio_tui.py book.pdf notes.txt --time-scale 0.5
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from studio.cli.main import non_negative_float


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studio-tui", description="Audiobook Studio Textual TUI")
    parser.add_argument("sources", nargs="*", type=Path, help="Documents to load into the queue")
    parser.add_argument("--pages", type=int, help="Page count to assume for each file")
    parser.add_argument(
        "--time-scale",
        type=non_negative_float,
        default=1.0,
        help="Multiplier for simulated stage durations (default: 1.0)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        from studio.tui.app import LaunchOptions, StudioTUI
    except ImportError:
        print("error: Textual is not installed. Run `pip install textual rich`.", file=sys.stderr)
        return 1

    options = LaunchOptions(
        sources=[source.expanduser().resolve() for source in args.sources],
        pages=args.pages,
        time_scale=args.time_scale,
    )
    app = StudioTUI(options=options)
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
