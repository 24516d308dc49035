"""Built-in preflight checks."""

from typing import Iterable, Optional

from ..host import HostProbe
from ..models import DEFAULT_REQUIREMENTS, HostPaths, Requirements
from .base import Check, HostCheck, Tier, failed_tier, parse_count
from .cpu import CPUCheck
from .kvm import KVMHostCheck
from .memory import MemoryCheck
from .network import NetworkSpeedCheck
from .virt import VirtCheck

__all__ = [
    "Check",
    "HostCheck",
    "Tier",
    "failed_tier",
    "parse_count",
    "CPUCheck",
    "MemoryCheck",
    "VirtCheck",
    "KVMHostCheck",
    "NetworkSpeedCheck",
    "default_checks",
]


def default_checks(
    nics: Iterable[str] = (),
    probe: Optional[HostProbe] = None,
    paths: Optional[HostPaths] = None,
    requirements: Optional[Requirements] = None,
) -> list[HostCheck]:
    """Every built-in check, plus one link speed check per NIC."""
    shared = {
        "probe": probe or HostProbe(),
        "paths": paths or HostPaths(),
        "requirements": requirements or DEFAULT_REQUIREMENTS,
    }
    checks: list[HostCheck] = [
        CPUCheck(**shared),
        MemoryCheck(**shared),
        VirtCheck(**shared),
        KVMHostCheck(**shared),
    ]
    checks.extend(NetworkSpeedCheck(dev, **shared) for dev in nics)
    return checks
