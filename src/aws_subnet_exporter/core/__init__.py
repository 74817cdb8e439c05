"""
Subnet prefix analysis.

Pure address arithmetic and /28 prefix occupancy computation, with no I/O.
"""

from aws_subnet_exporter.core.analyzer import RESERVED_PER_SUBNET, analyze_subnet
from aws_subnet_exporter.core.cidr import (
    CIDR4,
    IPS_PER_PREFIX,
    PREFIX_LENGTH,
    calculate_max_ips,
    enumerate_candidate_prefixes,
    format_cidr,
    parse_address,
    parse_cidr,
    total_addresses,
)

__all__ = [
    # Analyzer
    "analyze_subnet",
    "RESERVED_PER_SUBNET",
    # Address arithmetic
    "CIDR4",
    "PREFIX_LENGTH",
    "IPS_PER_PREFIX",
    "parse_cidr",
    "parse_address",
    "format_cidr",
    "total_addresses",
    "calculate_max_ips",
    "enumerate_candidate_prefixes",
]
