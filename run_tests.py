#!/usr/bin/env python3
"""
Test Runner
===========
Unified test runner for all audiobook-studio tests.
Run with: python run_tests.py
"""

import sys
import subprocess
import time
from pathlib import Path

# Script-style modules run directly; the rest go through pytest
SCRIPT_MODULES = [
    "tests/test_events.py",
    "tests/test_cli.py",
    "tests/test_tui.py",
    "tests/test_tui_dashboard.py",
]

PYTEST_MODULES = [
    "tests/test_settings.py",
    "tests/test_ingestion.py",
    "tests/test_concurrency.py",
    "tests/test_driver.py",
    "tests/test_playback.py",
    "tests/test_controller.py",
    "tests/test_estimate_hypothesis.py",
]


def run_test(test_path: str) -> tuple[bool, float]:
    """
    Run a single test module.

    Returns:
        Tuple of (passed, duration_seconds)
    """
    if test_path in PYTEST_MODULES:
        command = [sys.executable, "-m", "pytest", "-q", test_path]
    else:
        command = [sys.executable, test_path]

    start = time.time()
    result = subprocess.run(
        command,
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent
    )
    duration = time.time() - start

    passed = result.returncode == 0

    if not passed:
        print(f"\n{'='*50}")
        print(f"FAILED: {test_path}")
        print(f"{'='*50}")
        print(result.stdout)
        print(result.stderr)

    return passed, duration


def main():
    """Run all tests and report results."""
    print("\n" + "="*60)
    print("   AUDIOBOOK STUDIO - TEST SUITE")
    print("="*60 + "\n")

    results = []
    total_start = time.time()

    for test_path in PYTEST_MODULES + SCRIPT_MODULES:
        if not Path(test_path).exists():
            print(f"⚠ SKIP: {test_path} (not found)")
            continue

        print(f"▸ Running {test_path}...", end=" ", flush=True)
        passed, duration = run_test(test_path)

        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"{status} ({duration:.1f}s)")

        results.append((test_path, passed, duration))

    total_duration = time.time() - total_start

    # Summary
    print("\n" + "="*60)
    print("   RESULTS SUMMARY")
    print("="*60)

    passed_count = sum(1 for _, p, _ in results if p)
    failed_count = len(results) - passed_count

    for test_path, passed, duration in results:
        status = "✓" if passed else "✗"
        name = Path(test_path).stem
        print(f"  {status} {name}: {duration:.1f}s")

    print(f"\n  Total: {passed_count} passed, {failed_count} failed")
    print(f"  Duration: {total_duration:.1f}s")
    print("="*60 + "\n")

    if failed_count > 0:
        print("❌ TESTS FAILED")
        return 1
    print("✅ ALL TESTS PASSED")
    return 0


if __name__ == "__main__":
    sys.exit(main())
