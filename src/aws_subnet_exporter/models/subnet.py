"""
Data models for subnet inventory and prefix occupancy.

Inventory records (Subnet, NetworkInterface) are built by the inventory
fetcher from EC2 responses. SubnetOccupancy is produced by the prefix
analyzer. All of them live for a single poll cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aws_subnet_exporter.core.cidr import CIDR4

# Label value used when a subnet carries no Name tag
NO_NAME_TAG = "No name tag found"


@dataclass
class Subnet:
    """A VPC subnet as reported by the inventory."""

    subnet_id: str
    vpc_id: str
    cidr_block: str  # "172.16.1.0/24"
    availability_zone: str
    name: str = NO_NAME_TAG
    available_ips: int = 0  # Cloud-reported free address count

    @property
    def label_values(self) -> tuple[str, str, str, str, str]:
        """Metric label values in (vpcid, subnetid, cidrblock, az, name) order."""
        return (
            self.vpc_id,
            self.subnet_id,
            self.cidr_block,
            self.availability_zone,
            self.name,
        )


@dataclass
class NetworkInterface:
    """A network interface attached to a subnet."""

    interface_id: str = ""
    private_ips: list[str] = field(default_factory=list)  # ["172.16.1.125"]
    ipv4_prefixes: list[str] = field(default_factory=list)  # ["172.16.1.112/28"]


@dataclass
class SubnetOccupancy:
    """
    Address and /28 prefix occupancy of one subnet.

    Attributes:
        total_addresses: Raw address count of the subnet CIDR.
        max_prefixes: Number of /28 blocks that fit in the subnet.
        delegated_prefixes: /28 blocks delegated to interfaces.
        available_prefixes: Free /28 blocks in ascending address order.
        interfaces_in_use: Number of attached interfaces.
        allocated_addresses: Addresses consumed by prefixes, assigned IPs
            and platform-reserved addresses.
        free_addresses: total_addresses - allocated_addresses.
    """

    total_addresses: int
    max_prefixes: int
    delegated_prefixes: frozenset[CIDR4]
    available_prefixes: list[CIDR4]
    interfaces_in_use: int
    allocated_addresses: int
    free_addresses: int

    @property
    def used_prefix_count(self) -> int:
        return len(self.delegated_prefixes)

    @property
    def available_prefix_count(self) -> int:
        return len(self.available_prefixes)
