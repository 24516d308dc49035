"""CLI entry point — run the preflight checks, output clearly."""

import json
import logging
from typing import List, Optional

import typer

from . import __version__
from .checks import default_checks
from .engine import run_checks
from .format import format_human, results_to_dict
from .host import HostProbe
from .models import CheckResult, Requirements, Status

# --ci exit codes; an error outranks a failed requirement. 2 is left to
# click for usage errors.
EXIT_FAILED = 1
EXIT_ERROR = 3


app = typer.Typer(help="Check whether this host meets the installer's hardware requirements.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _validate_nics(value: Optional[List[str]]) -> List[str]:
    nics = value or []
    for dev in nics:
        if not dev or "/" in dev:
            raise typer.BadParameter(f"Invalid NIC name: {dev!r}")
    return nics


def _validate_product(value: str) -> str:
    if not value.strip():
        raise typer.BadParameter("must not be empty")
    return value.strip()


def _validate_timeout(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise typer.BadParameter("must be positive")
    return value


@app.command()
def main(
    nic: Optional[List[str]] = typer.Option(None, "--nic", "-n", callback=_validate_nics, help="Check link speed of this NIC (repeatable)"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    ci: bool = typer.Option(False, "--ci", help="CI mode: exit 1 if a requirement is not met, 3 if a check could not run"),
    parallel: bool = typer.Option(False, "--parallel", help="Run checks concurrently"),
    product: str = typer.Option("SaftOS", "--product", callback=_validate_product, help="Product name used in messages"),
    timeout: Optional[float] = typer.Option(None, "--timeout", callback=_validate_timeout, help="Seconds to wait for each host utility"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and exception types"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
) -> None:
    """Run CPU, memory, virtualization, KVM and NIC speed checks."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    checks = default_checks(
        nics=nic,
        probe=HostProbe(timeout=timeout),
        requirements=Requirements(product=product),
    )
    results = run_checks(checks, parallel=parallel)

    if json_out:
        typer.echo(json.dumps(results_to_dict(results), indent=2))
    else:
        typer.echo(format_human(results, product=product, verbose=verbose))

    if ci:
        _ci_exit(results)


def _ci_exit(results: List[CheckResult]) -> None:
    """Exit non-zero if anything did not pass."""
    statuses = {r.status for r in results}
    if Status.ERROR in statuses:
        raise typer.Exit(EXIT_ERROR)
    if Status.FAIL in statuses:
        raise typer.Exit(EXIT_FAILED)


if __name__ == "__main__":
    app()
