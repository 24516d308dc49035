"""Hardware-assisted virtualization check."""

from dataclasses import dataclass

from .base import HostCheck


@dataclass
class KVMHostCheck(HostCheck):
    name = "kvm"

    def run(self) -> str:
        """Only a missing node fails the check; other stat errors propagate."""
        try:
            self.probe.stat(self.paths.dev_kvm)
        except FileNotFoundError:
            return (
                f"{self.requirements.product} requires hardware-assisted virtualization, "
                f"but {self.paths.dev_kvm} does not exist."
            )
        return ""
