#!/usr/bin/env python3
"""Pre-commit hook to prevent direct datetime.now() calls in package code.

Team Agreement:
> No `datetime.now()` calls in engine code - always inject the time authority

Enqueue timestamps, dedup windows and expiry are all computed from
TimeAuthorityProtocol so tests can freeze and advance the clock. This
script scans scrapdesk/ for datetime.now() or datetime.utcnow() calls
and fails if any are found outside the system clock adapter.

Usage:
    python scripts/check_no_datetime_now.py [package_directory]

Exit codes:
    0: No violations found
    1: Violations found - datetime.now() detected in package code
"""

import ast
import sys
from pathlib import Path

FORBIDDEN_ATTRIBUTES = {"now", "utcnow"}

# Files (relative to the package directory) ALLOWED to read the wall clock
ALLOWED_FILES = {
    "infrastructure/adapters/system_clock.py",
}


def _is_datetime_now(node: ast.Call) -> bool:
    func = node.func
    if not isinstance(func, ast.Attribute) or func.attr not in FORBIDDEN_ATTRIBUTES:
        return False
    target = func.value
    # datetime.now() and datetime.datetime.now()
    if isinstance(target, ast.Name):
        return target.id == "datetime"
    if isinstance(target, ast.Attribute):
        return target.attr == "datetime"
    return False


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Check a single file for datetime.now() violations.

    Args:
        file_path: Path to the Python file to check.

    Returns:
        List of (line_number, line_content) tuples for violations.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
        tree = ast.parse(content, filename=str(file_path))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    lines = content.splitlines()
    violations: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Call) and _is_datetime_now(node):
            violations.append((node.lineno, lines[node.lineno - 1].strip()))
    return sorted(violations)


def find_violations(package_dir: Path) -> dict[str, list[tuple[int, str]]]:
    """Scan every module of the package except the allowed ones."""
    all_violations: dict[str, list[tuple[int, str]]] = {}
    for py_file in package_dir.rglob("*.py"):
        relative_path = py_file.relative_to(package_dir).as_posix()
        if relative_path in ALLOWED_FILES:
            continue
        violations = check_file(py_file)
        if violations:
            all_violations[relative_path] = violations
    return all_violations


def main() -> int:
    """Main entry point for the pre-commit hook.

    Returns:
        Exit code: 0 for success, 1 for violations found.
    """
    if len(sys.argv) > 1:
        package_dir = Path(sys.argv[1])
    else:
        package_dir = Path(__file__).parent.parent / "scrapdesk"

    if not package_dir.exists():
        print(f"Warning: {package_dir} not found, skipping check")
        return 0

    all_violations = find_violations(package_dir)
    if not all_violations:
        print(f"No datetime.now() violations found in {package_dir}")
        return 0

    print("Direct datetime.now() calls detected!")
    print()
    print("Violations found:")
    print()
    for file_path, violations in sorted(all_violations.items()):
        print(f"  {file_path}:")
        for line_num, line_content in violations:
            print(f"    Line {line_num}: {line_content}")
        print()

    print("How to fix:")
    print("  1. Inject TimeAuthorityProtocol in your service constructor")
    print("  2. Use self._time.now() instead of datetime.now()")
    print()
    return 1


if __name__ == "__main__":
    sys.exit(main())
