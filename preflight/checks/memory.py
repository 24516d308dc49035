"""Physical memory check.

`dmidecode -t 19` prints one Memory Array Mapped Address block per mapped
range, e.g. on a host with 512GiB RAM:

    Handle 0x0024, DMI type 19, 31 bytes
    Memory Array Mapped Address
            Starting Address: 0x00000000000
            Ending Address: 0x0007FFFFFFF
            Range Size: 2 GB
            Physical Array Handle: 0x000A
            Partition Width: 1

    Handle 0x0025, DMI type 19, 31 bytes
    Memory Array Mapped Address
            Starting Address: 0x0000000100000000k
            Ending Address: 0x000000807FFFFFFFk
            Range Size: 510 GB
            Physical Array Handle: 0x000B
            Partition Width: 1

Adding up the Range Size lines gives installed RAM. dmidecode may print any
of bytes, kB, MB, GB, TB, PB, EB or ZB as the unit.

When dmidecode is missing or yields nothing, /proc/meminfo's MemTotal is used
instead. MemTotal excludes firmware and kernel reservations, so it reads low:
  - 32GiB RAM may report MemTotal 32856636 kB = 31.11GiB
  - 64GiB RAM may report MemTotal 65758888 kB = 62.71GiB
  - 128GiB RAM may report MemTotal 131841120 kB = 125.73GiB
Thresholds are knocked down by 10% for that source (28.8GiB for 32, 57.6GiB
for 64). Messages still show the MemTotal figure, e.g. "31GiB" on a 32GiB host.
"""

import logging
import re
import subprocess
from dataclasses import dataclass

from ..exceptions import MemTotalNotFoundError
from .base import HostCheck, Tier, failed_tier

logger = logging.getLogger(__name__)

# Everything is in KiB because that's what /proc/meminfo uses
ONE_TIB_KIB = 1 << 30
HUGE_UNITS = frozenset({"TB", "PB", "EB", "ZB"})
MEMINFO_WIGGLE_ROOM = 0.9

_RANGE_SIZE_RE = re.compile(r"^Range Size:\s*(\d+)\s+(\S+)", re.ASCII)
_MEMTOTAL_RE = re.compile(r"^MemTotal:\s*(\d+)", re.ASCII)


def range_size_to_kib(size: int, unit: str) -> int:
    """Convert one Range Size fragment to KiB. Unknown units count as 0."""
    if unit == "GB":
        return size << 20
    if unit == "MB":
        return size << 10
    if unit == "kB":
        return size
    if unit == "bytes":
        return size >> 10
    return 0


def parse_dmidecode_kib(output: str) -> int:
    """Sum the Range Size lines of `dmidecode -t 19` output, in KiB."""
    total = 0
    for line in output.splitlines():
        m = _RANGE_SIZE_RE.match(line.strip())
        if not m:
            continue
        size, unit = int(m.group(1)), m.group(2)
        if unit in HUGE_UNITS:
            logger.info(
                "Found Memory Array Mapped Address with Range Size %d %s, "
                "assuming 1 TiB RAM for preflight check",
                size,
                unit,
            )
            return ONE_TIB_KIB
        total += range_size_to_kib(size, unit)
    return total


def parse_meminfo_kib(lines) -> int:
    """MemTotal in KiB from /proc/meminfo lines, or 0 if absent."""
    for line in lines:
        m = _MEMTOTAL_RE.match(line)
        if m:
            return int(m.group(1))
    return 0


def format_kib(total_kib: int) -> str:
    """Whole GiB, or whole MiB for anything under a GiB (tiny VMs)."""
    gib = total_kib >> 20
    if gib < 1:
        return f"{total_kib >> 10}MiB"
    return f"{gib}GiB"


@dataclass
class MemoryCheck(HostCheck):
    name = "memory"

    def _dmidecode_kib(self) -> int:
        try:
            out = self.probe.output(self.paths.dmidecode)
        except (OSError, subprocess.SubprocessError, UnicodeDecodeError) as e:
            logger.debug("dmidecode unavailable, falling back to %s: %s", self.paths.meminfo, e)
            return 0
        return parse_dmidecode_kib(out)

    def _meminfo_kib(self) -> int:
        with self.probe.open_text(self.paths.meminfo) as f:
            total = parse_meminfo_kib(f)
        if total == 0:
            raise MemTotalNotFoundError(self.paths.meminfo)
        return total

    def run(self) -> str:
        wiggle_room = 1.0
        total_kib = self._dmidecode_kib()
        if total_kib == 0:
            total_kib = self._meminfo_kib()
            wiggle_room = MEMINFO_WIGGLE_ROOM

        gib = total_kib >> 20
        reported = format_kib(total_kib)
        req = self.requirements
        tier = failed_tier(float(gib), req.min_memory_gib_test, req.min_memory_gib_prod, wiggle_room)
        if tier == Tier.TEST:
            return (
                f"Only {reported} RAM detected. {req.product} requires at least "
                f"{req.min_memory_gib_test}GiB for testing and {req.min_memory_gib_prod}GiB for production use."
            )
        if tier == Tier.PRODUCTION:
            return (
                f"{reported} RAM detected. {req.product} requires at least "
                f"{req.min_memory_gib_prod}GiB for production use."
            )
        return ""
