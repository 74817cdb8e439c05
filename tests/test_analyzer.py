import random

import pytest
from conftest import make_subnet

from aws_subnet_exporter.core.analyzer import RESERVED_PER_SUBNET, analyze_subnet
from aws_subnet_exporter.core.cidr import (
    enumerate_candidate_prefixes,
    format_address,
    parse_address,
    parse_cidr,
)
from aws_subnet_exporter.exceptions import (
    InvalidAddress,
    InvalidCIDR,
    PrefixOutsideSubnet,
)
from aws_subnet_exporter.models.subnet import NetworkInterface


def _strs(prefixes) -> list[str]:
    return [str(p) for p in prefixes]


class TestScenarios:
    def test_delegated_prefix_and_assigned_ips(self) -> None:
        interface = NetworkInterface(
            interface_id="eni-1",
            private_ips=["172.16.1.125", "172.16.1.126"],
            ipv4_prefixes=["172.16.1.112/28"],
        )
        occupancy = analyze_subnet(make_subnet("172.16.1.0/24"), [interface])

        assert occupancy.total_addresses == 256
        assert occupancy.max_prefixes == 16
        assert _strs(occupancy.delegated_prefixes) == ["172.16.1.112/28"]
        available = _strs(occupancy.available_prefixes)
        assert "172.16.1.112/28" not in available
        assert "172.16.1.96/28" in available
        assert "172.16.1.0/28" in available
        assert len(available) == 15
        assert occupancy.interfaces_in_use == 1
        assert occupancy.allocated_addresses == 16 + 2 + RESERVED_PER_SUBNET
        assert occupancy.free_addresses == 256 - 23

    def test_empty_subnet_has_every_prefix_available(self) -> None:
        occupancy = analyze_subnet(make_subnet("172.16.0.0/24"), [])

        assert _strs(occupancy.available_prefixes) == [
            f"172.16.0.{i * 16}/28" for i in range(16)
        ]
        assert occupancy.used_prefix_count == 0
        assert occupancy.interfaces_in_use == 0
        assert occupancy.allocated_addresses == RESERVED_PER_SUBNET

    def test_subnet_crossing_octet_boundary(self) -> None:
        occupancy = analyze_subnet(make_subnet("10.0.0.0/23"), [])

        expected = [f"10.0.0.{i * 16}/28" for i in range(16)] + [
            f"10.0.1.{i * 16}/28" for i in range(16)
        ]
        assert _strs(occupancy.available_prefixes) == expected

    def test_missing_mask_is_invalid(self) -> None:
        with pytest.raises(InvalidCIDR):
            analyze_subnet(make_subnet("172.16.0.0"), [])

    def test_single_block_subnet_with_assigned_ip(self) -> None:
        interface = NetworkInterface(private_ips=["172.16.0.5"])
        occupancy = analyze_subnet(make_subnet("172.16.0.0/28"), [interface])

        assert occupancy.max_prefixes == 1
        assert occupancy.available_prefixes == []


class TestOccupancy:
    def test_ips_spread_across_interfaces_block_their_prefixes(self) -> None:
        interfaces = [
            NetworkInterface(private_ips=["10.0.0.4"]),
            NetworkInterface(private_ips=["10.0.1.20"]),
        ]
        occupancy = analyze_subnet(make_subnet("10.0.0.0/23"), interfaces)

        available = _strs(occupancy.available_prefixes)
        assert "10.0.0.0/28" not in available
        assert "10.0.1.16/28" not in available
        assert len(available) == 30
        assert occupancy.interfaces_in_use == 2

    def test_duplicate_entries_counted_once(self) -> None:
        interfaces = [
            NetworkInterface(private_ips=["10.0.0.4"], ipv4_prefixes=["10.0.0.32/28"]),
            NetworkInterface(private_ips=["10.0.0.4"], ipv4_prefixes=["10.0.0.32/28"]),
        ]
        occupancy = analyze_subnet(make_subnet("10.0.0.0/24"), interfaces)

        assert occupancy.used_prefix_count == 1
        assert occupancy.allocated_addresses == 16 + 1 + RESERVED_PER_SUBNET

    def test_prefix_delegated_and_ip_in_other_block(self) -> None:
        interface = NetworkInterface(
            private_ips=["10.0.0.250"], ipv4_prefixes=["10.0.0.0/28"]
        )
        occupancy = analyze_subnet(make_subnet("10.0.0.0/24"), [interface])

        available = _strs(occupancy.available_prefixes)
        assert available[0] == "10.0.0.16/28"
        assert "10.0.0.240/28" not in available
        assert len(available) == 14

    def test_fully_allocated_subnet_reports_negative_free(self) -> None:
        interface = NetworkInterface(ipv4_prefixes=["172.16.0.0/28"])
        occupancy = analyze_subnet(make_subnet("172.16.0.0/28"), [interface])

        assert occupancy.available_prefixes == []
        assert occupancy.free_addresses == 16 - (16 + RESERVED_PER_SUBNET)

    def test_idempotent(self) -> None:
        interfaces = [
            NetworkInterface(private_ips=["10.0.3.7", "10.0.0.1"], ipv4_prefixes=["10.0.2.48/28"])
        ]
        subnet = make_subnet("10.0.0.0/22")
        assert analyze_subnet(subnet, interfaces) == analyze_subnet(subnet, interfaces)


class TestInputErrors:
    def test_prefix_outside_subnet(self) -> None:
        interface = NetworkInterface(ipv4_prefixes=["172.16.2.0/28"])
        with pytest.raises(PrefixOutsideSubnet) as exc_info:
            analyze_subnet(make_subnet("172.16.1.0/24"), [interface])
        assert exc_info.value.prefix == "172.16.2.0/28"

    def test_prefix_must_be_28(self) -> None:
        interface = NetworkInterface(ipv4_prefixes=["172.16.1.0/27"])
        with pytest.raises(InvalidCIDR):
            analyze_subnet(make_subnet("172.16.1.0/24"), [interface])

    def test_malformed_prefix(self) -> None:
        interface = NetworkInterface(ipv4_prefixes=["172.16.1.0"])
        with pytest.raises(InvalidCIDR):
            analyze_subnet(make_subnet("172.16.1.0/24"), [interface])

    def test_malformed_address(self) -> None:
        interface = NetworkInterface(private_ips=["172.16.1"])
        with pytest.raises(InvalidAddress):
            analyze_subnet(make_subnet("172.16.1.0/24"), [interface])


class TestInvariants:
    """Properties checked over seeded random subnets and interfaces."""

    @staticmethod
    def _random_case(rng: random.Random):
        mask = rng.randint(20, 28)
        subnet_cidr = parse_cidr(f"10.{rng.randint(0, 255)}.{rng.randint(0, 255)}.0/{mask}")
        candidates = list(enumerate_candidate_prefixes(subnet_cidr))

        delegated = rng.sample(candidates, k=rng.randint(0, len(candidates) // 2))
        ips = {
            format_address(rng.randint(subnet_cidr.base, subnet_cidr.last))
            for _ in range(rng.randint(0, 20))
        }
        interfaces = [
            NetworkInterface(private_ips=sorted(ips)[i::3], ipv4_prefixes=[str(p) for p in delegated[i::3]])
            for i in range(3)
        ]
        return make_subnet(str(subnet_cidr)), interfaces, candidates, ips

    @pytest.mark.parametrize("seed", range(25))
    def test_properties(self, seed: int) -> None:
        rng = random.Random(seed)
        subnet, interfaces, candidates, ips = self._random_case(rng)
        occupancy = analyze_subnet(subnet, interfaces)

        mask = parse_cidr(subnet.cidr_block).mask
        assert occupancy.max_prefixes == 2 ** (28 - mask) == len(candidates)

        available = set(occupancy.available_prefixes)
        assert available.isdisjoint(occupancy.delegated_prefixes)
        assert available | occupancy.delegated_prefixes <= set(candidates)

        addresses = [parse_address(ip) for ip in ips]
        for prefix in occupancy.available_prefixes:
            assert not any(prefix.contains(address) for address in addresses)

        bases = [p.base for p in occupancy.available_prefixes]
        assert bases == sorted(set(bases))

        assert occupancy.free_addresses == (
            occupancy.total_addresses - occupancy.allocated_addresses
        )
