#!/usr/bin/env python3
"""
Project-level CLI launcher.

Usage:
    python studio_cli.py <command> [options]
"""

from studio.cli.main import main


if __name__ == "__main__":
    raise SystemExit(main())
