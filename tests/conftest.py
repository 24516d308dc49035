"""Shared fakes: a scripted subprocess.run and pseudo-files under tmp_path."""

import subprocess
from pathlib import Path

import pytest

from preflight.host import HostProbe
from preflight.models import HostPaths


class FakeRun:
    """Stands in for subprocess.run. Maps argv tuples to (returncode, stdout)."""

    def __init__(self, responses: dict | None = None):
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []

    def __call__(self, argv, capture_output=False, text=False, check=False, timeout=None):
        self.calls.append(list(argv))
        key = tuple(argv)
        if key not in self.responses:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        returncode, stdout = self.responses[key]
        if check and returncode != 0:
            raise subprocess.CalledProcessError(returncode, list(argv), output=stdout)
        return subprocess.CompletedProcess(list(argv), returncode, stdout=stdout, stderr="")


@pytest.fixture
def host_paths(tmp_path: Path) -> HostPaths:
    """HostPaths pointing into tmp_path; nothing exists until a test writes it."""
    (tmp_path / "net").mkdir()
    return HostPaths(
        meminfo=str(tmp_path / "meminfo"),
        dev_kvm=str(tmp_path / "kvm"),
        net_speed=str(tmp_path / "net" / "{dev}" / "speed"),
    )


@pytest.fixture
def fake_run() -> FakeRun:
    return FakeRun()


@pytest.fixture
def probe(fake_run: FakeRun) -> HostProbe:
    return HostProbe(run=fake_run)
