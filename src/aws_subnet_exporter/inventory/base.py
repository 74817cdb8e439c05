"""Interface consumed by the poller to read subnet inventory."""

from typing import Protocol

from aws_subnet_exporter.models.subnet import NetworkInterface, Subnet


class SubnetInventory(Protocol):
    """
    Read-only source of subnets and their network interfaces.

    Implementations raise InventoryError when the backing API call fails.
    """

    def list_subnets(self, name_filter: str) -> list[Subnet]:
        """List subnets whose Name tag matches a wildcard pattern."""
        ...

    def list_interfaces(self, subnet_id: str) -> list[NetworkInterface]:
        """List network interfaces attached to a subnet."""
        ...
