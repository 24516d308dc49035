"""Tests for the CPU, virtualization, KVM and NIC speed checks."""

import subprocess
from pathlib import Path

import pytest

from preflight.checks import CPUCheck, HostCheck, KVMHostCheck, NetworkSpeedCheck, VirtCheck, default_checks, parse_count
from preflight.exceptions import LinkSpeedError, PreflightError
from preflight.models import HostPaths, Requirements

NPROC = HostPaths().nproc
DETECT_VIRT = HostPaths().detect_virt


def _write_speed(paths: HostPaths, dev: str, content: str) -> Path:
    p = Path(paths.net_speed.format(dev=dev))
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


# CPU


@pytest.mark.parametrize(
    "count, expected",
    [
        (1, "Only 1 CPU cores detected. SaftOS requires at least 8 cores for testing and 16 for production use."),
        (7, "Only 7 CPU cores detected. SaftOS requires at least 8 cores for testing and 16 for production use."),
        (8, "8 CPU cores detected. SaftOS requires at least 16 cores for production use."),
        (15, "15 CPU cores detected. SaftOS requires at least 16 cores for production use."),
        (16, ""),
        (128, ""),
    ],
)
def test_cpu_tiers(probe, fake_run, count, expected):
    """Below test: both tiers. Below production: production only. Else pass."""
    fake_run.responses[NPROC] = (0, f"{count}\n")
    assert CPUCheck(probe=probe).run() == expected
    assert fake_run.calls == [list(NPROC)]


def test_cpu_unparseable_count_is_zero(probe, fake_run):
    fake_run.responses[NPROC] = (0, "lots\n")
    msg = CPUCheck(probe=probe).run()
    assert msg.startswith("Only 0 CPU cores detected.")


def test_cpu_missing_nproc_propagates(probe):
    with pytest.raises(FileNotFoundError):
        CPUCheck(probe=probe).run()


def test_cpu_nonzero_exit_propagates(probe, fake_run):
    fake_run.responses[NPROC] = (1, "")
    with pytest.raises(subprocess.CalledProcessError):
        CPUCheck(probe=probe).run()


def test_cpu_uses_product_and_custom_thresholds(probe, fake_run):
    fake_run.responses[NPROC] = (0, "3")
    req = Requirements(product="Acme", min_cpu_test=2, min_cpu_prod=4)
    assert CPUCheck(probe=probe, requirements=req).run() == (
        "3 CPU cores detected. Acme requires at least 4 cores for production use."
    )


# Virtualization


def test_virt_none_with_nonzero_exit_passes(probe, fake_run):
    """systemd-detect-virt prints 'none' and exits 1 on bare metal."""
    fake_run.responses[DETECT_VIRT] = (1, "none\n")
    assert VirtCheck(probe=probe).run() == ""


def test_virt_detected_names_technology(probe, fake_run):
    fake_run.responses[DETECT_VIRT] = (0, "kvm\n")
    msg = VirtCheck(probe=probe).run()
    assert msg == "System is virtualized (kvm) which is not supported in production."


def test_virt_other_nonzero_exit_propagates(probe, fake_run):
    fake_run.responses[DETECT_VIRT] = (2, "Failed to check for virtualization\n")
    with pytest.raises(subprocess.CalledProcessError):
        VirtCheck(probe=probe).run()


def test_virt_missing_binary_propagates(probe):
    with pytest.raises(FileNotFoundError):
        VirtCheck(probe=probe).run()


# KVM


def test_kvm_missing_node_fails_requirement(probe, host_paths):
    msg = KVMHostCheck(probe=probe, paths=host_paths).run()
    assert msg == (
        f"SaftOS requires hardware-assisted virtualization, but {host_paths.dev_kvm} does not exist."
    )


def test_kvm_present_node_passes(probe, host_paths):
    Path(host_paths.dev_kvm).touch()
    assert KVMHostCheck(probe=probe, paths=host_paths).run() == ""


def test_kvm_other_stat_error_propagates(probe, tmp_path):
    """ENOTDIR is not 'does not exist' and must surface as an error."""
    (tmp_path / "notadir").write_text("")
    paths = HostPaths(dev_kvm=str(tmp_path / "notadir" / "kvm"))
    with pytest.raises(NotADirectoryError):
        KVMHostCheck(probe=probe, paths=paths).run()


# NIC speed


def test_network_virtio_sentinel_is_error(probe, host_paths):
    path = _write_speed(host_paths, "eth0", "-1\n")
    with pytest.raises(LinkSpeedError) as exc:
        NetworkSpeedCheck("eth0", probe=probe, paths=host_paths).run()
    assert exc.value.speed_mbps == -1
    assert str(path) in str(exc.value)
    assert "(got -1)" in str(exc.value)
    assert isinstance(exc.value, PreflightError)


def test_network_unparseable_speed_is_error(probe, host_paths):
    _write_speed(host_paths, "eth0", "unknown\n")
    with pytest.raises(LinkSpeedError, match=r"got 0"):
        NetworkSpeedCheck("eth0", probe=probe, paths=host_paths).run()


def test_network_2500_fails_production_only(probe, host_paths):
    _write_speed(host_paths, "eth0", "2500\n")
    msg = NetworkSpeedCheck("eth0", probe=probe, paths=host_paths).run()
    assert msg == "Link speed of eth0 is 2.5Gbps. SaftOS requires at least 10Gbps for production use."


def test_network_1000_reports_whole_gbps(probe, host_paths):
    _write_speed(host_paths, "eno1", "1000")
    msg = NetworkSpeedCheck("eno1", probe=probe, paths=host_paths).run()
    assert "is 1Gbps." in msg


def test_network_below_test_reports_mbps(probe, host_paths):
    _write_speed(host_paths, "eth1", "100\n")
    msg = NetworkSpeedCheck("eth1", probe=probe, paths=host_paths).run()
    assert msg == (
        "Link speed of eth1 is only 100Mbps. SaftOS requires at least 1Gbps for testing "
        "and 10Gbps for production use."
    )


def test_network_10g_passes(probe, host_paths):
    _write_speed(host_paths, "eth0", "10000\n")
    assert NetworkSpeedCheck("eth0", probe=probe, paths=host_paths).run() == ""


def test_network_missing_speed_file_propagates(probe, host_paths):
    with pytest.raises(FileNotFoundError):
        NetworkSpeedCheck("nope0", probe=probe, paths=host_paths).run()


# Factory


def test_default_checks_one_network_check_per_nic(probe, host_paths):
    checks = default_checks(nics=["eth0", "eth1"], probe=probe, paths=host_paths)
    assert [c.name for c in checks] == ["cpu", "memory", "virt", "kvm", "network", "network"]
    assert [c.dev for c in checks if isinstance(c, NetworkSpeedCheck)] == ["eth0", "eth1"]
    assert all(c.probe is probe and c.paths is host_paths for c in checks)


def test_default_checks_without_nics():
    checks = default_checks()
    assert not any(isinstance(c, NetworkSpeedCheck) for c in checks)
    assert len(checks) == 4


# Parsing and base class


@pytest.mark.parametrize(
    "text, value",
    [
        ("16\n", 16),
        ("  -1 ", -1),
        ("+8", 8),
        ("1_0000", 0),
        ("١٦", 0),  # Arabic-Indic digits
        ("2.5", 0),
        ("", 0),
    ],
)
def test_parse_count_accepts_only_plain_decimal(text, value):
    assert parse_count(text) == value


def test_network_underscored_speed_is_error(probe, host_paths):
    _write_speed(host_paths, "eth0", "1_0000\n")
    with pytest.raises(LinkSpeedError, match=r"got 0"):
        NetworkSpeedCheck("eth0", probe=probe, paths=host_paths).run()


def test_cpu_underscored_count_is_zero(probe, fake_run):
    fake_run.responses[NPROC] = (0, "1_6\n")
    assert CPUCheck(probe=probe).run().startswith("Only 0 CPU cores detected.")


def test_host_check_is_abstract():
    with pytest.raises(TypeError):
        HostCheck()
