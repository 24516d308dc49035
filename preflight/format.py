"""Terminal output formatting — box layout, colors, width control."""

import shutil
import textwrap
from typing import List

import click

from .engine import summarize
from .models import CheckResult, Status

MAX_WIDTH = 72
MIN_WIDTH = 40  # below this the box is unreadable anyway


def _report_width() -> int:
    """Terminal columns clamped to [MIN_WIDTH, MAX_WIDTH]."""
    columns = shutil.get_terminal_size((MAX_WIDTH, 24)).columns
    return max(MIN_WIDTH, min(MAX_WIDTH, columns))


def _wrap(text: str, indent: int = 0, width: int = MAX_WIDTH) -> List[str]:
    """Wrap a bullet line; continuation lines sit under the bullet's text."""
    return textwrap.wrap(
        text,
        width=width,
        initial_indent=" " * indent,
        subsequent_indent=" " * (indent + 2),
    ) or [" " * indent]


def _group_by_status(results: List[CheckResult]) -> tuple[List[CheckResult], List[CheckResult], List[CheckResult]]:
    """Split into: errors (could not run), failures (below a tier), passed."""
    errors = [r for r in results if r.status == Status.ERROR]
    failures = [r for r in results if r.status == Status.FAIL]
    passed = [r for r in results if r.status == Status.PASS]
    return errors, failures, passed


def _summary_line(results: List[CheckResult]) -> str:
    counts = summarize(results)
    parts = [f"{counts['pass']} passed"]
    if counts["fail"]:
        parts.append(f"{counts['fail']} below requirements")
    if counts["error"]:
        parts.append(f"{counts['error']} could not run")
    return f" {len(results)} check(s): " + ", ".join(parts)


def format_human(results: List[CheckResult], product: str = "SaftOS", verbose: bool = False) -> str:
    """Build the human terminal output as a single string."""
    width = _report_width()
    lines = []

    lines.append("┌" + "─" * (width - 2) + "┐")
    lines.append(f" {product} · hardware preflight")
    lines.append("─" * width)

    errors, failures, passed = _group_by_status(results)
    color = "red" if errors else ("yellow" if failures else "green")
    lines.append(click.style(_summary_line(results), fg=color))
    lines.append("─" * width)

    if errors:
        lines.append(" CHECKS THAT COULD NOT RUN")
        for r in errors:
            text = f"● {r.name}: {r.error}"
            if verbose and r.details.get("exception"):
                text = f"{text} [{r.details['exception']}]"
            for ln in _wrap(text, indent=2, width=width):
                lines.append(click.style(ln, fg="red"))
    if failures:
        lines.append(" REQUIREMENTS NOT MET")
        for r in failures:
            for ln in _wrap(f"○ {r.message}", indent=2, width=width):
                lines.append(click.style(ln, fg="yellow"))
    if passed and (verbose or not (errors or failures)):
        lines.append(" PASSED")
        for ln in _wrap("✓ " + ", ".join(r.name for r in passed), indent=2, width=width):
            lines.append(click.style(ln, dim=True))

    lines.append("─" * width)
    footer = " Run with --json for machine output  ·  --ci for exit codes"
    if len(footer) > width:
        footer = " --json  ·  --ci  ·  --help"
    lines.append(click.style(footer, dim=True))
    lines.append("└" + "─" * (width - 2) + "┘")

    return "\n".join(lines)


def results_to_dict(results: List[CheckResult]) -> dict:
    """JSON-ready payload for piping into the installer or CI."""
    return {
        "ok": all(r.passed for r in results),
        "summary": summarize(results),
        "checks": [
            {
                "name": r.name,
                "status": r.status.value,
                "message": r.message,
                "error": r.error,
                **({"details": r.details} if r.details else {}),
            }
            for r in results
        ],
    }
