"""Virtualization detection check."""

import subprocess
from dataclasses import dataclass

from .base import HostCheck


@dataclass
class VirtCheck(HostCheck):
    name = "virt"

    def run(self) -> str:
        try:
            out = self.probe.output(self.paths.detect_virt)
        except subprocess.CalledProcessError as e:
            # systemd-detect-virt exits non-zero and prints "none" when it
            # finds no hypervisor. That is the passing case.
            if (e.stdout or "").strip() == "none":
                return ""
            raise
        virt = out.strip()
        return f"System is virtualized ({virt}) which is not supported in production."
