"""Errors raised when a check cannot be carried out at all."""


class PreflightError(Exception):
    """Base class for check execution failures (not requirement failures)."""


class MemTotalNotFoundError(PreflightError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"unable to extract MemTotal from {path}")


class LinkSpeedError(PreflightError):
    """NIC speed file held no usable value (0 on parse failure, -1 for virtio)."""

    def __init__(self, path: str, speed_mbps: int):
        self.path = path
        self.speed_mbps = speed_mbps
        super().__init__(f"unable to determine NIC speed from {path} (got {speed_mbps})")
