"""Requirement thresholds, host locations and per-check results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Requirements:
    """Minimum hardware for test and production installs.

    Defaults follow the published hardware requirements
    (https://docs.harvesterhci.io/v1.3/install/requirements/#hardware-requirements).
    """

    product: str = "SaftOS"
    min_cpu_test: int = 8
    min_cpu_prod: int = 16
    min_memory_gib_test: int = 32
    min_memory_gib_prod: int = 64
    min_network_gbps_test: int = 1
    min_network_gbps_prod: int = 10

    def __post_init__(self) -> None:
        tiers = {
            "cpu": (self.min_cpu_test, self.min_cpu_prod),
            "memory": (self.min_memory_gib_test, self.min_memory_gib_prod),
            "network": (self.min_network_gbps_test, self.min_network_gbps_prod),
        }
        for resource, (test, prod) in tiers.items():
            if test <= 0 or prod <= 0:
                raise ValueError(f"{resource} minimums must be positive (got {test}/{prod})")
            if test > prod:
                raise ValueError(
                    f"{resource} test minimum {test} is above production minimum {prod}"
                )


@dataclass(frozen=True)
class HostPaths:
    """Where the checks look. Override for tests or unusual hosts."""

    meminfo: str = "/proc/meminfo"
    dev_kvm: str = "/dev/kvm"
    net_speed: str = "/sys/class/net/{dev}/speed"  # formatted with dev=
    nproc: tuple[str, ...] = ("/usr/bin/nproc", "--all")
    dmidecode: tuple[str, ...] = ("/usr/sbin/dmidecode", "-t", "19")
    detect_virt: tuple[str, ...] = ("/usr/bin/systemd-detect-virt", "--vm")


DEFAULT_REQUIREMENTS = Requirements()


class Status(str, Enum):
    PASS = "pass"
    FAIL = "fail"  # host below test or production tier
    ERROR = "error"  # check could not run


@dataclass
class CheckResult:
    """Outcome of one check as seen by the installer."""

    name: str
    status: Status
    message: str = ""
    error: Optional[str] = None
    details: dict = field(default_factory=dict)  # e.g. {"exception": "FileNotFoundError"}

    @property
    def passed(self) -> bool:
        return self.status == Status.PASS
