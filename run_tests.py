#!/usr/bin/env python3
"""Script to run tests with code coverage for HubExplorer.

This script provides a convenient way to run the unit tests for the
HubExplorer package with optional code coverage reporting.
"""

import os
import sys
import argparse
import subprocess


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run tests for HubExplorer")

    parser.add_argument(
        "--with-coverage",
        action="store_true",
        help="Run tests with code coverage"
    )

    parser.add_argument(
        "--html",
        action="store_true",
        help="Generate HTML coverage report"
    )

    parser.add_argument(
        "--xml",
        action="store_true",
        help="Generate XML coverage report"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show debug output"
    )

    return parser.parse_args()


def run_tests(args):
    """Run the tests based on the provided arguments."""
    test_cmd = [sys.executable, "-m", "pytest"]

    if args.with_coverage:
        test_cmd.extend([
            "--cov=hubexplorer",
            "--cov-report=term"
        ])

        if args.html:
            test_cmd.append("--cov-report=html")

        if args.xml:
            test_cmd.append("--cov-report=xml")

    test_cmd.append("tests")

    if args.debug:
        test_cmd.append("-v")

    print(f"Running command: {' '.join(test_cmd)}")

    try:
        result = subprocess.run(test_cmd, check=True)
        return result.returncode
    except subprocess.CalledProcessError as e:
        print(f"Error running tests: {e}")
        return e.returncode


def main():
    """Main entry point for the test runner."""
    args = parse_args()

    if args.html:
        os.makedirs("htmlcov", exist_ok=True)

    return run_tests(args)


if __name__ == "__main__":
    sys.exit(main())
