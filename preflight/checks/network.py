"""NIC link speed check."""

from dataclasses import dataclass

from ..exceptions import LinkSpeedError
from .base import HostCheck, Tier, failed_tier, parse_count


@dataclass
class NetworkSpeedCheck(HostCheck):
    dev: str

    name = "network"

    @property
    def speed_path(self) -> str:
        return self.paths.net_speed.format(dev=self.dev)

    def run(self) -> str:
        path = self.speed_path
        out = self.probe.read_text(path)
        speed_mbps = parse_count(out)
        if speed_mbps < 1:
            # 0 when unparseable, -1 for virtio NICs under virtualization
            raise LinkSpeedError(path, speed_mbps)

        # float: 2.5Gbps ethernet is a thing
        speed_gbps = speed_mbps / 1000
        req = self.requirements
        tier = failed_tier(speed_gbps, req.min_network_gbps_test, req.min_network_gbps_prod)
        if tier == Tier.TEST:
            return (
                f"Link speed of {self.dev} is only {speed_mbps}Mbps. {req.product} requires at least "
                f"{req.min_network_gbps_test}Gbps for testing and {req.min_network_gbps_prod}Gbps for production use."
            )
        if tier == Tier.PRODUCTION:
            return (
                f"Link speed of {self.dev} is {speed_gbps:g}Gbps. {req.product} requires at least "
                f"{req.min_network_gbps_prod}Gbps for production use."
            )
        return ""
