"""CPU core count check."""

from dataclasses import dataclass

from .base import HostCheck, Tier, failed_tier, parse_count


@dataclass
class CPUCheck(HostCheck):
    name = "cpu"

    def run(self) -> str:
        """Compare `nproc --all` against the CPU tiers. Command errors propagate."""
        out = self.probe.output(self.paths.nproc)
        nproc = parse_count(out)  # unparseable counts as 0, which fails the test tier

        req = self.requirements
        tier = failed_tier(nproc, req.min_cpu_test, req.min_cpu_prod)
        if tier == Tier.TEST:
            return (
                f"Only {nproc} CPU cores detected. {req.product} requires at least "
                f"{req.min_cpu_test} cores for testing and {req.min_cpu_prod} for production use."
            )
        if tier == Tier.PRODUCTION:
            return (
                f"{nproc} CPU cores detected. {req.product} requires at least "
                f"{req.min_cpu_prod} cores for production use."
            )
        return ""
