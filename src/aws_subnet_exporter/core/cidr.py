"""
IPv4 CIDR arithmetic for subnet prefix analysis.

All addresses are handled as plain integers over the 32-bit unsigned address
space, so stepping through /28 blocks carries across every octet boundary
(e.g. 10.0.0.240/28 is followed by 10.0.1.0/28).

Usage:
    from aws_subnet_exporter.core.cidr import parse_cidr, enumerate_candidate_prefixes

    subnet = parse_cidr("10.0.0.0/23")
    for prefix in enumerate_candidate_prefixes(subnet):
        print(prefix)  # 10.0.0.0/28, 10.0.0.16/28, ... 10.0.1.240/28
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Iterator

from aws_subnet_exporter.exceptions import InvalidAddress, InvalidCIDR

# =============================================================================
# Constants
# =============================================================================

ADDRESS_BITS = 32
ADDRESS_SPACE = 1 << ADDRESS_BITS

# Delegated prefix size used by EC2 prefix delegation
PREFIX_LENGTH = 28
IPS_PER_PREFIX = 1 << (ADDRESS_BITS - PREFIX_LENGTH)


# =============================================================================
# CIDR Value Type
# =============================================================================


@dataclass(frozen=True, order=True)
class CIDR4:
    """
    An IPv4 network block.

    Attributes:
        base: Network address as an integer, host bits always zero.
        mask: Prefix length in [0, 32].
    """

    base: int
    mask: int

    @property
    def size(self) -> int:
        """Number of addresses in the block."""
        return total_addresses(self.mask)

    @property
    def last(self) -> int:
        """Highest address in the block."""
        return self.base + self.size - 1

    def contains(self, address: int) -> bool:
        """Check whether an integer address falls inside this block."""
        return self.base <= address <= self.last

    def within(self, other: CIDR4) -> bool:
        """Check whether this block lies entirely inside another block."""
        return other.base <= self.base and self.last <= other.last

    def __str__(self) -> str:
        return format_cidr(self.base, self.mask)


# =============================================================================
# Parsing and Formatting
# =============================================================================


def parse_address(address: str) -> int:
    """
    Parse a dotted-quad IPv4 address into an integer.

    Raises:
        InvalidAddress: If the string is not A.B.C.D with octets in [0, 255].
    """
    try:
        return int(ipaddress.IPv4Address(address))
    except (ipaddress.AddressValueError, ValueError):
        raise InvalidAddress(address)


def parse_cidr(cidr: str) -> CIDR4:
    """
    Parse an "A.B.C.D/M" string.

    Host bits set in the address are cleared, the same way EC2 canonicalizes
    CIDR input.

    Args:
        cidr: CIDR string such as "172.16.0.0/24".

    Returns:
        CIDR4 with the network base address and prefix length.

    Raises:
        InvalidCIDR: If the string is malformed, an octet is outside [0, 255]
            or the prefix length is outside [0, 32].
    """
    parts = cidr.strip().split("/")
    if len(parts) != 2:
        raise InvalidCIDR(cidr)

    address, mask_str = parts
    if not (mask_str.isascii() and mask_str.isdigit()):
        raise InvalidCIDR(cidr, f"non-numeric prefix length '{mask_str}'")

    mask = int(mask_str)
    if mask > ADDRESS_BITS:
        raise InvalidCIDR(cidr, f"prefix length {mask} is not in [0, 32]")

    try:
        base = parse_address(address)
    except InvalidAddress:
        raise InvalidCIDR(cidr, f"invalid address '{address}'")

    return CIDR4(base=base & netmask(mask), mask=mask)


def format_address(address: int) -> str:
    """Format an integer address as a dotted-quad string."""
    return str(ipaddress.IPv4Address(address))


def format_cidr(base: int, mask: int) -> str:
    """Format a base address and prefix length as "A.B.C.D/M"."""
    return f"{format_address(base)}/{mask}"


# =============================================================================
# Arithmetic
# =============================================================================


def netmask(mask: int) -> int:
    """Integer netmask for a prefix length (e.g. 24 -> 0xFFFFFF00)."""
    return (ADDRESS_SPACE - 1) ^ ((1 << (ADDRESS_BITS - mask)) - 1)


def total_addresses(mask: int) -> int:
    """Raw number of addresses covered by a prefix length."""
    return 1 << (ADDRESS_BITS - mask)


def calculate_max_ips(cidr: str) -> int:
    """
    Number of usable host addresses in a CIDR block.

    Excludes the network and broadcast addresses, so a /32 yields -1.
    This is a host-count helper; subnet analysis uses the raw total.

    Raises:
        InvalidCIDR: If the CIDR cannot be parsed.
    """
    return parse_cidr(cidr).size - 2


def enumerate_candidate_prefixes(subnet: CIDR4) -> Iterator[CIDR4]:
    """
    Yield every /28 block of a subnet in ascending address order.

    Starts at the subnet base and steps by 16 addresses. Subnets smaller
    than a /28 have no candidates.
    """
    if subnet.mask > PREFIX_LENGTH:
        return

    for base in range(subnet.base, subnet.base + subnet.size, IPS_PER_PREFIX):
        yield CIDR4(base=base, mask=PREFIX_LENGTH)
