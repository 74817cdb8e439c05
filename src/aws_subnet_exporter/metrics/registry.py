"""
Prometheus gauges for subnet occupancy.

SubnetMetrics owns a dedicated CollectorRegistry so that the exported
series are exactly the subnet gauges (no process/platform collectors) and
tests can build independent instances.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

from aws_subnet_exporter.models.subnet import Subnet, SubnetOccupancy

METRIC_PREFIX = "aws_subnet_exporter_"
LABELS = ["vpcid", "subnetid", "cidrblock", "az", "name"]


class SubnetMetrics:
    """
    Labeled gauge registry for subnet occupancy.

    Each gauge is keyed by (vpcid, subnetid, cidrblock, az, name) and keeps
    the last value published for that label tuple.

    Attributes:
        registry: CollectorRegistry holding all exporter metrics.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        self.available_ips = Gauge(
            METRIC_PREFIX + "available_ips",
            "Available IPs in subnets",
            LABELS,
            registry=self.registry,
        )
        self.max_ips = Gauge(
            METRIC_PREFIX + "max_ips",
            "Max IPs in subnet",
            LABELS,
            registry=self.registry,
        )
        self.used_prefixes = Gauge(
            METRIC_PREFIX + "used_prefixes",
            "Used prefixes in subnets",
            LABELS,
            registry=self.registry,
        )
        self.available_prefixes = Gauge(
            METRIC_PREFIX + "available_prefixes",
            "Available prefixes in subnets",
            LABELS,
            registry=self.registry,
        )
        # Only incremented when failing subnets are skipped instead of fatal
        self.subnet_errors = Counter(
            METRIC_PREFIX + "subnet_errors",
            "Subnets that could not be analyzed",
            ["subnetid"],
            registry=self.registry,
        )

    def publish(self, subnet: Subnet, occupancy: SubnetOccupancy) -> None:
        """Set all four gauges of one subnet."""
        labels = subnet.label_values
        self.available_ips.labels(*labels).set(subnet.available_ips)
        self.max_ips.labels(*labels).set(occupancy.total_addresses)
        self.used_prefixes.labels(*labels).set(occupancy.used_prefix_count)
        self.available_prefixes.labels(*labels).set(occupancy.available_prefix_count)

    def record_error(self, subnet_id: str = "") -> None:
        """Count a subnet (or, with no id, a whole listing) that failed."""
        self.subnet_errors.labels(subnet_id).inc()

    def render(self) -> bytes:
        """Serialize the current snapshot in the Prometheus text format."""
        return generate_latest(self.registry)
