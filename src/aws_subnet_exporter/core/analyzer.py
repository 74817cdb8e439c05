"""
Prefix availability analysis for a single subnet.

Given a subnet and its attached network interfaces, works out which /28
blocks are delegated, which are still free for delegation (not delegated
and not overlapping any individually assigned address), and how many
addresses are consumed overall.
"""

from itertools import islice

from aws_subnet_exporter.core.cidr import (
    CIDR4,
    IPS_PER_PREFIX,
    PREFIX_LENGTH,
    enumerate_candidate_prefixes,
    netmask,
    parse_address,
    parse_cidr,
)
from aws_subnet_exporter.exceptions import InvalidCIDR, PrefixOutsideSubnet
from aws_subnet_exporter.models.subnet import NetworkInterface, Subnet, SubnetOccupancy
from aws_subnet_exporter.utils.logger import get_logger

logger = get_logger(__name__)

# AWS reserves the network address, VPC router, DNS, one future-use address
# and the broadcast address in every subnet.
RESERVED_PER_SUBNET = 5


# =============================================================================
# Analysis
# =============================================================================


def analyze_subnet(
    subnet: Subnet, interfaces: list[NetworkInterface]
) -> SubnetOccupancy:
    """
    Compute /28 prefix occupancy for a subnet.

    Args:
        subnet: Subnet whose CIDR block is analyzed.
        interfaces: Network interfaces attached to the subnet.

    Returns:
        SubnetOccupancy for the subnet.

    Raises:
        InvalidCIDR: Subnet CIDR or a delegated prefix is malformed, or a
            delegated prefix is not a /28.
        InvalidAddress: An assigned address is malformed.
        PrefixOutsideSubnet: A delegated prefix lies outside the subnet.
    """
    network = parse_cidr(subnet.cidr_block)
    total = network.size
    max_prefixes = total // IPS_PER_PREFIX

    ips_in_use, prefixes_in_use = _collect_in_use(network, interfaces)

    allocated = (
        IPS_PER_PREFIX * len(prefixes_in_use) + len(ips_in_use) + RESERVED_PER_SUBNET
    )

    # /28 blocks that hold at least one assigned address
    blocked = {ip & netmask(PREFIX_LENGTH) for ip in ips_in_use}

    available: list[CIDR4] = []
    candidates = islice(enumerate_candidate_prefixes(network), max_prefixes)
    for prefix in candidates:
        if prefix in prefixes_in_use or prefix.base in blocked:
            continue
        available.append(prefix)

    logger.debug(
        f"Subnet {subnet.subnet_id} ({subnet.cidr_block}): "
        f"{len(interfaces)} interfaces, {len(prefixes_in_use)} delegated, "
        f"{len(available)}/{max_prefixes} prefixes available"
    )

    return SubnetOccupancy(
        total_addresses=total,
        max_prefixes=max_prefixes,
        delegated_prefixes=frozenset(prefixes_in_use),
        available_prefixes=available,
        interfaces_in_use=len(interfaces),
        allocated_addresses=allocated,
        free_addresses=total - allocated,
    )


# =============================================================================
# Helper Functions
# =============================================================================


def _collect_in_use(
    network: CIDR4, interfaces: list[NetworkInterface]
) -> tuple[set[int], set[CIDR4]]:
    """Gather assigned addresses and delegated prefixes across all interfaces."""
    ips_in_use: set[int] = set()
    prefixes_in_use: set[CIDR4] = set()

    for interface in interfaces:
        for ip in interface.private_ips:
            ips_in_use.add(parse_address(ip))

        for raw_prefix in interface.ipv4_prefixes:
            prefix = parse_cidr(raw_prefix)
            if prefix.mask != PREFIX_LENGTH:
                raise InvalidCIDR(raw_prefix, f"delegated prefix must be /{PREFIX_LENGTH}")
            if not prefix.within(network):
                raise PrefixOutsideSubnet(raw_prefix, str(network))
            prefixes_in_use.add(prefix)

    return ips_in_use, prefixes_in_use
