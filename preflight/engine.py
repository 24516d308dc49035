"""Check engine — runs a flat list of checks and collects results."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from .checks.base import Check
from .models import CheckResult, Status

logger = logging.getLogger(__name__)


def run_check(check: Check) -> CheckResult:
    """Run one check, turning a raised exception into an ERROR result."""
    try:
        message = check.run()
    except Exception as e:
        logger.warning("%s check could not run: %s", check.name, e)
        return CheckResult(
            name=check.name,
            status=Status.ERROR,
            error=str(e) or type(e).__name__,
            details={"exception": type(e).__name__},
        )
    if message:
        return CheckResult(name=check.name, status=Status.FAIL, message=message)
    return CheckResult(name=check.name, status=Status.PASS)


def run_checks(checks: Sequence[Check], parallel: bool = False) -> list[CheckResult]:
    """Run every check; results come back in the order the checks were given.

    Checks share no state, so ``parallel`` just gives each one its own thread.
    """
    if not parallel or len(checks) < 2:
        return [run_check(c) for c in checks]
    with ThreadPoolExecutor(max_workers=len(checks), thread_name_prefix="preflight") as pool:
        return list(pool.map(run_check, checks))


def summarize(results: Sequence[CheckResult]) -> dict[str, int]:
    """Count of results per status, e.g. {"pass": 3, "fail": 1, "error": 0}."""
    counts = {s.value: 0 for s in Status}
    for r in results:
        counts[r.status.value] += 1
    return counts
