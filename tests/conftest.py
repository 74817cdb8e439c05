import pytest

from aws_subnet_exporter.exceptions import InventoryError
from aws_subnet_exporter.metrics.registry import SubnetMetrics
from aws_subnet_exporter.models.subnet import NetworkInterface, Subnet


def make_subnet(
    cidr_block: str = "172.16.1.0/24",
    subnet_id: str = "subnet-0a1b2c3d",
    name: str = "private-a",
    available_ips: int = 200,
) -> Subnet:
    return Subnet(
        subnet_id=subnet_id,
        vpc_id="vpc-1234",
        cidr_block=cidr_block,
        availability_zone="eu-west-2a",
        name=name,
        available_ips=available_ips,
    )


def label_dict(subnet: Subnet) -> dict[str, str]:
    return dict(zip(["vpcid", "subnetid", "cidrblock", "az", "name"], subnet.label_values))


class FakeInventory:
    """In-memory SubnetInventory recording how often it is polled."""

    def __init__(
        self,
        subnets: list[Subnet] | None = None,
        interfaces: dict[str, list[NetworkInterface]] | None = None,
        fail_listing: bool = False,
    ):
        self.subnets = subnets or []
        self.interfaces = interfaces or {}
        self.fail_listing = fail_listing
        self.list_calls = 0
        self.interface_calls: list[str] = []

    def list_subnets(self, name_filter: str) -> list[Subnet]:
        self.list_calls += 1
        if self.fail_listing:
            raise InventoryError("Cannot describe subnets: throttled")
        return list(self.subnets)

    def list_interfaces(self, subnet_id: str) -> list[NetworkInterface]:
        self.interface_calls.append(subnet_id)
        return list(self.interfaces.get(subnet_id, []))


@pytest.fixture
def metrics() -> SubnetMetrics:
    return SubnetMetrics()
