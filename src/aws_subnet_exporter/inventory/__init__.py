"""
Subnet inventory sources.

Provides the SubnetInventory interface used by the poller and the boto3
backed EC2 implementation.
"""

from aws_subnet_exporter.inventory.base import SubnetInventory
from aws_subnet_exporter.inventory.ec2 import (
    EC2Inventory,
    create_ec2_client,
    get_name_from_tags,
)

__all__ = [
    "SubnetInventory",
    "EC2Inventory",
    "create_ec2_client",
    "get_name_from_tags",
]
