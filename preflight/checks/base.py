"""Base types for checks."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Protocol

from ..host import HostProbe
from ..models import DEFAULT_REQUIREMENTS, HostPaths, Requirements

# Plain ASCII decimal with optional sign; no underscores, no other scripts' digits
_INT_RE = re.compile(r"[+-]?[0-9]+")


class Check(Protocol):
    """One preflight check.

    ``run()`` returns an empty string when the host passes, otherwise text
    explaining which requirement it misses. It raises when the check itself
    could not be carried out.
    """

    name: str

    def run(self) -> str: ...


class Tier(str, Enum):
    TEST = "test"
    PRODUCTION = "production"


def parse_count(text: str) -> int:
    """Integer value of a one-line utility or sysfs reading, 0 if it isn't one."""
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return 0
    return int(text)


def failed_tier(value: float, test_min: float, prod_min: float, wiggle_room: float = 1.0) -> Optional[Tier]:
    """Lowest tier ``value`` falls short of, or None if it meets both."""
    if value < test_min * wiggle_room:
        return Tier.TEST
    if value < prod_min * wiggle_room:
        return Tier.PRODUCTION
    return None


@dataclass(kw_only=True)
class HostCheck(ABC):
    """Collaborators shared by the built-in checks."""

    name: ClassVar[str] = "check"

    probe: HostProbe = field(default_factory=HostProbe)
    paths: HostPaths = field(default_factory=HostPaths)
    requirements: Requirements = DEFAULT_REQUIREMENTS

    @abstractmethod
    def run(self) -> str: ...
