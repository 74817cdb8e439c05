"""
EC2 inventory backed by boto3.

This module provides EC2Inventory, which lists subnets and their network
interfaces through the EC2 API, and create_ec2_client() for building a
client from the standard AWS credential chain (environment, shared config,
instance or container role).
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from aws_subnet_exporter.exceptions import ConfigurationError, InventoryError
from aws_subnet_exporter.models.subnet import NO_NAME_TAG, NetworkInterface, Subnet
from aws_subnet_exporter.utils.logger import get_logger

logger = get_logger(__name__)

NAME_TAG_FILTER = "tag:Name"
SUBNET_ID_FILTER = "subnet-id"


# =============================================================================
# Client Construction
# =============================================================================


def create_ec2_client(region: str):
    """
    Create an EC2 client for a region.

    Args:
        region: AWS region name, e.g. "eu-west-2".

    Returns:
        boto3 EC2 client.

    Raises:
        ConfigurationError: If no AWS credentials can be resolved.
    """
    try:
        session = boto3.session.Session(region_name=region)
        credentials = session.get_credentials()
    except BotoCoreError as e:
        raise ConfigurationError(f"Failed to load AWS configuration: {e}") from e

    if credentials is None:
        raise ConfigurationError(
            "No AWS credentials found. Configure the environment, a shared "
            "credentials profile or an instance role."
        )

    logger.debug(f"Created EC2 client for region {region}")
    return session.client("ec2")


# =============================================================================
# EC2Inventory Class
# =============================================================================


class EC2Inventory:
    """
    Subnet inventory read from the EC2 API.

    Attributes:
        client: boto3 EC2 client, shared read-only by the poller.
    """

    def __init__(self, client):
        self.client = client

    def list_subnets(self, name_filter: str) -> list[Subnet]:
        """
        List subnets whose Name tag matches a wildcard pattern.

        The pattern is evaluated by EC2 ('*' and '?' wildcards), not as a
        regular expression.

        Raises:
            InventoryError: If DescribeSubnets fails.
        """
        logger.debug(f"Describing subnets with Name filter '{name_filter}'")
        filters = [{"Name": NAME_TAG_FILTER, "Values": [name_filter]}]

        try:
            paginator = self.client.get_paginator("describe_subnets")
            raw_subnets = [
                raw
                for page in paginator.paginate(Filters=filters)
                for raw in page.get("Subnets", [])
            ]
        except (BotoCoreError, ClientError) as e:
            raise InventoryError(f"Cannot describe subnets: {e}") from e

        subnets = []
        for raw in raw_subnets:
            if not raw.get("CidrBlock"):
                logger.debug(f"Skipping subnet {raw.get('SubnetId')} without IPv4 CIDR")
                continue
            subnets.append(_to_subnet(raw))

        logger.debug(f"Found {len(subnets)} subnets")
        return subnets

    def list_interfaces(self, subnet_id: str) -> list[NetworkInterface]:
        """
        List network interfaces attached to a subnet.

        Raises:
            InventoryError: If DescribeNetworkInterfaces fails.
        """
        filters = [{"Name": SUBNET_ID_FILTER, "Values": [subnet_id]}]

        try:
            paginator = self.client.get_paginator("describe_network_interfaces")
            raw_interfaces = [
                raw
                for page in paginator.paginate(Filters=filters)
                for raw in page.get("NetworkInterfaces", [])
            ]
        except (BotoCoreError, ClientError) as e:
            raise InventoryError(
                f"Cannot describe network interfaces of {subnet_id}: {e}"
            ) from e

        return [_to_interface(raw) for raw in raw_interfaces]


# =============================================================================
# Helper Functions
# =============================================================================


def get_name_from_tags(tags: list[dict] | None) -> str:
    """Return the Name tag value, or a placeholder when absent."""
    for tag in tags or []:
        if tag.get("Key") == "Name":
            return tag.get("Value", "")
    return NO_NAME_TAG


def _to_subnet(raw: dict) -> Subnet:
    """Convert a DescribeSubnets entry into a Subnet."""
    return Subnet(
        subnet_id=raw["SubnetId"],
        vpc_id=raw["VpcId"],
        cidr_block=raw["CidrBlock"],
        availability_zone=raw["AvailabilityZone"],
        name=get_name_from_tags(raw.get("Tags")),
        available_ips=raw.get("AvailableIpAddressCount", 0),
    )


def _to_interface(raw: dict) -> NetworkInterface:
    """Convert a DescribeNetworkInterfaces entry into a NetworkInterface."""
    return NetworkInterface(
        interface_id=raw.get("NetworkInterfaceId", ""),
        private_ips=[
            address["PrivateIpAddress"]
            for address in raw.get("PrivateIpAddresses", [])
            if address.get("PrivateIpAddress")
        ],
        ipv4_prefixes=[
            prefix["Ipv4Prefix"]
            for prefix in raw.get("Ipv4Prefixes", [])
            if prefix.get("Ipv4Prefix")
        ],
    )
