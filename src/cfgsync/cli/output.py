"""Terminal output for the cfgsync commands.

Status lines start with a mark (done, note, failed) that is colored when
stdout is a terminal. Progress lines carry no mark.
"""

import sys

RESET = "\033[0m"

# kind -> (mark, ANSI color)
MARKS = {
    "success": ("✓", "\033[32m"),
    "info": ("•", "\033[33m"),
    "error": ("✗", "\033[31m"),
}

DRY_RUN_TAG = "[DRY RUN]"


def _print_marked(kind: str, message: str) -> None:
    mark, color = MARKS[kind]
    if sys.stdout.isatty():
        mark = f"{color}{mark}{RESET}"
    print(f"{mark} {message}")


def success(message: str) -> None:
    _print_marked("success", message)


def info(message: str) -> None:
    _print_marked("info", message)


def error(message: str) -> None:
    _print_marked("error", message)


def progress(message: str, dry_run: bool = False) -> None:
    """Print a progress line, tagged when the command will not change anything."""
    print(f"{DRY_RUN_TAG} {message}" if dry_run else message)
