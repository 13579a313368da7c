#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
"""
UtilityBelt Test Runner

Central test orchestrator: runs each utility test module with pytest and
prints a per-module summary.

⚠️  NOTE: This is NOT a pytest module!
    Run it directly: python test_runner.py [category] [action]

Test Categories:
  - utils:   Utility modules (numbers, currencies, dates, strings, helpers)
  - core:    Configuration and logging setup
  - all:     Everything, in dependency order
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

import argcomplete

from utilitybelt.test_scripts.test_utils import (
    Colors,
    exit_with_result,
    print_header,
    print_info,
    print_section,
    print_success,
    print_error,
    print_suite_summary,
    print_warning,
    )

TEST_DIR = "utilitybelt/test_scripts/test_utilities"

# action -> (label, test module)
UTILS_TESTS = {
    "validation": ("Validation and error taxonomy", "test_validation_utils.py"),
    "number": ("Number rounding and formatting", "test_number_utils.py"),
    "atomic-unit": ("Atomic units", "test_atomic_unit_utils.py"),
    "crypto": ("Crypto shifting", "test_crypto_utils.py"),
    "currency": ("Currency names and formatting", "test_currency_utils.py"),
    "string": ("String helpers", "test_string_utils.py"),
    "datetime": ("Datetime helpers", "test_datetime_utils.py"),
    "helpers": ("Cookie, email, object, uuid and delay helpers", "test_helpers.py"),
    }

CORE_TESTS = {
    "config-logging": ("Settings and logging setup", "test_config_logging.py"),
    }

# Global flag for coverage mode (set by main())
_COVERAGE_MODE = False


def _build_pytest_cmd(test_file: str, test_names: list = None, verbose: bool = False) -> list:
    """
    Build pytest command for one test module.

    Args:
        test_file: Test module name inside TEST_DIR
        test_names: Optional list of test names to filter (uses -k flag)
        verbose: If True, disable output capture (-s)

    Returns:
        List of command parts for run_command
    """
    cmd = [sys.executable, "-m", "pytest", f"{TEST_DIR}/{test_file}", "-v"]
    if verbose:
        cmd.append("-s")
    if _COVERAGE_MODE:
        cmd.extend([
            "--cov=utilitybelt",
            "--cov-append",  # Append to existing coverage data
            "--cov-report=html",
            "--cov-report=term-missing:skip-covered",
            ])
    if test_names:
        cmd.extend(["-k", " or ".join(test_names)])
    return cmd


def run_command(cmd: list[str], description: str, verbose: bool = False) -> bool:
    """
    Run a command and return True if successful.

    Test subprocesses always run with UTILITYBELT_TEST_MODE=1 so that
    file logging stays off.
    """
    print(f"\n{Colors.BLUE}Running: {description}{Colors.NC}")
    print(f"Command:\n└─▶ $ {' '.join(cmd)}")

    env = os.environ.copy()
    env["UTILITYBELT_TEST_MODE"] = "1"

    try:
        result = subprocess.run(cmd, cwd=Path(__file__).parent, capture_output=not verbose, text=True, env=env)
    except OSError as e:
        print_error(f"{description} - ERROR: {e}")
        return False

    if result.returncode == 0:
        print_success(f"{description} - PASSED")
        return True

    print_error(f"{description} - FAILED (exit code: {result.returncode})")
    if not verbose and result.stdout:
        # Show the tail of pytest output so the failure is visible without -v
        print("\n".join(result.stdout.splitlines()[-30:]))
    return False


def run_group(tests: dict, action: str, verbose: bool = False, test_names: list = None) -> bool:
    """Run a single test module of a group."""
    label, test_file = tests[action]
    print_section(label)
    print_info(f"Testing: {TEST_DIR}/{test_file}")
    return run_command(_build_pytest_cmd(test_file, test_names, verbose), f"{label} tests", verbose=verbose)


def run_group_all(tests: dict, suite_name: str, verbose: bool = False, stop_on_failure: bool = True) -> bool:
    """Run every module of a group and print the summary."""
    print_header(f"UtilityBelt {suite_name}")

    results = []
    for action in tests:
        success = run_group(tests, action, verbose=verbose)
        results.append((tests[action][0], success))

        if not success and stop_on_failure:
            print_error(f"Test failed: {tests[action][0]}")
            print_warning(f"Stopping {suite_name.lower()} execution")
            break

    return print_suite_summary(results, suite_name)


def run_all_tests(verbose: bool = False) -> bool:
    """Run core tests first, then every utility module."""
    core_ok = run_group_all(CORE_TESTS, "Core Tests", verbose=verbose)
    if not core_ok:
        print_warning("Core tests failed, utility tests skipped")
        return False
    return run_group_all(UTILS_TESTS, "Utility Tests", verbose=verbose, stop_on_failure=False)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="UtilityBelt Test Runner - Organized test execution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Test Categories:

  utils    - Utility Module Tests
             Verifies: number rounding and labels, atomic units, crypto shifting,
             currency formatting, datetime helpers, strings, small helpers.

  core     - Configuration and logging setup

  all      - Run ALL tests

Examples:
  python test_runner.py all                        # All tests
  python test_runner.py -v utils currency          # One module, full output
  python test_runner.py utils number test_million_threshold_is_inclusive
  python test_runner.py --coverage all             # With coverage (htmlcov/index.html)
        """
        )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show full test output",
        default=False
        )

    parser.add_argument(
        "--coverage",
        action="store_true",
        help="Run tests with code coverage tracking (generates htmlcov/index.html report)",
        default=False
        )

    subparsers = parser.add_subparsers(
        dest="category",
        help="Test category to run",
        required=False
        )

    utils_parser = subparsers.add_parser(
        "utils",
        help="Utility module tests",
        formatter_class=argparse.RawDescriptionHelpFormatter
        )
    utils_parser.add_argument(
        "action",
        choices=[*UTILS_TESTS, "all"],
        help="Utility test module to run"
        )
    utils_parser.add_argument(
        "test_names",
        nargs="*",
        help="Optional: specific test names to run (e.g., test_million_threshold_is_inclusive)"
        )

    core_parser = subparsers.add_parser(
        "core",
        help="Configuration and logging tests",
        formatter_class=argparse.RawDescriptionHelpFormatter
        )
    core_parser.add_argument(
        "action",
        choices=[*CORE_TESTS, "all"],
        help="Core test module to run"
        )
    core_parser.add_argument(
        "test_names",
        nargs="*",
        help="Optional: specific test names to run"
        )

    subparsers.add_parser("all", help="Run ALL tests")

    return parser


def main():
    """Main entry point."""
    global _COVERAGE_MODE

    parser = create_parser()

    argcomplete.autocomplete(parser)
    args = parser.parse_args()

    if not args.category:
        parser.print_help()
        return 1

    verbose = args.verbose
    test_names = getattr(args, "test_names", None)
    _COVERAGE_MODE = args.coverage

    if _COVERAGE_MODE:
        print_header("UtilityBelt Test Suite - Coverage Mode")
        coverage_file = Path(__file__).parent / ".coverage"
        if coverage_file.exists():
            coverage_file.unlink()
            print(f"{Colors.YELLOW}🗑️  Cleared previous coverage data{Colors.NC}\n")

    if args.category == "all":
        success = run_all_tests(verbose=verbose)
    else:
        tests = UTILS_TESTS if args.category == "utils" else CORE_TESTS
        if args.action == "all":
            suite_name = "Utility Tests" if args.category == "utils" else "Core Tests"
            success = run_group_all(tests, suite_name, verbose=verbose, stop_on_failure=False)
        else:
            success = run_group(tests, args.action, verbose=verbose, test_names=test_names)

    if _COVERAGE_MODE:
        print_info("Coverage report: htmlcov/index.html")

    return 0 if success else 1


if __name__ == "__main__":
    exit_with_result(main() == 0)
