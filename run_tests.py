#!/usr/bin/env python3
"""
Test runner for Folder Organizer.

Usage:
    python run_tests.py              # Unit, then integration tests
    python run_tests.py unit         # Unit tests only
    python run_tests.py integration  # Integration tests (real watchdog)
    python run_tests.py coverage     # Whole suite with coverage report

Install the test extra first: pip install -e ".[test]"
"""

import subprocess
import sys
from pathlib import Path

SUITES = {
    "unit": ["tests/unit"],
    "integration": ["tests/integration"],
    "coverage": ["--cov=folder_organizer", "--cov-report=term-missing", "tests"],
}


def run_suite(name):
    print(f"\n=== {name} ===")
    cmd = [sys.executable, "-m", "pytest", "-v", *SUITES[name]]
    return subprocess.run(cmd, cwd=Path(__file__).parent).returncode


def main():
    test_type = sys.argv[1].lower() if len(sys.argv) > 1 else "all"

    if test_type == "all":
        names = ["unit", "integration"]
    elif test_type in SUITES:
        names = [test_type]
    else:
        print(f"Unknown test type: {test_type}")
        print(__doc__)
        return 1

    codes = [run_suite(name) for name in names]
    return max(codes)


if __name__ == "__main__":
    sys.exit(main())
