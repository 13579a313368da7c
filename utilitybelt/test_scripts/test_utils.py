"""
UtilityBelt test output helpers.

Colored console output shared by the test runner.
"""
import sys


class Colors:
    """ANSI color codes for terminal output."""
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    RED = '\033[0;31m'
    BLUE = '\033[0;34m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color


def print_header(text: str):
    print(f"\n{Colors.CYAN}{'=' * 70}{Colors.NC}")
    print(f"{Colors.CYAN}{text:^70}{Colors.NC}")
    print(f"{Colors.CYAN}{'=' * 70}{Colors.NC}\n")


def print_section(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print('=' * 60)


def print_success(message: str):
    print(f"{Colors.GREEN}✅ {message}{Colors.NC}")


def print_error(message: str):
    print(f"{Colors.RED}❌ {message}{Colors.NC}")


def print_warning(message: str):
    print(f"{Colors.YELLOW}⚠️  {message}{Colors.NC}")


def print_info(message: str):
    print(f"{Colors.BLUE}ℹ️  {message}{Colors.NC}")


def print_suite_summary(results: list[tuple[str, bool]], suite_name: str) -> bool:
    """
    Print one PASS/FAIL line per test module and the overall count.

    Args:
        results: (module label, passed) pairs in execution order
        suite_name: Name shown in the summary header

    Returns:
        True if every module passed
    """
    print_section(f"{suite_name} Summary")

    passed = sum(1 for _, success in results if success)
    total = len(results)

    for label, success in results:
        status = f"{Colors.GREEN}✅ PASS{Colors.NC}" if success else f"{Colors.RED}❌ FAIL{Colors.NC}"
        print(f"{status} - {label}")

    print(f"\nResults: {passed}/{total} test modules passed")

    if passed == total:
        print_success(f"All {suite_name.lower()} passed! 🎉")
    else:
        print_error(f"{total - passed} test module(s) failed")

    return passed == total


def exit_with_result(success: bool):
    """Exit with appropriate code based on result."""
    sys.exit(0 if success else 1)
