"""
Subnet polling background task.

Periodically lists subnets from the inventory, analyzes each one and
publishes its gauges. The first cycle runs immediately; later cycles run on
a fixed period. A cycle that overruns drops the ticks it missed instead of
running them back to back.
"""

import asyncio

from aws_subnet_exporter.core.analyzer import analyze_subnet
from aws_subnet_exporter.exceptions import InventoryError, SubnetExporterError
from aws_subnet_exporter.inventory.base import SubnetInventory
from aws_subnet_exporter.metrics.registry import SubnetMetrics
from aws_subnet_exporter.models.subnet import Subnet, SubnetOccupancy
from aws_subnet_exporter.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Background Task
# =============================================================================


async def poll_subnets(
    inventory: SubnetInventory,
    metrics: SubnetMetrics,
    name_filter: str,
    period: float,
    stop_event: asyncio.Event,
    fail_fast: bool = True,
) -> None:
    """
    Poll the inventory until stop_event is set.

    Args:
        inventory: Source of subnets and interfaces.
        metrics: Gauge registry to publish into.
        name_filter: Name tag wildcard passed to the inventory.
        period: Seconds between cycle starts.
        stop_event: Set to end the loop.
        fail_fast: Propagate the first error instead of skipping subnets.

    Raises:
        SubnetExporterError: In fail-fast mode, on any cycle failure.
    """
    loop = asyncio.get_running_loop()
    next_tick = loop.time()

    while not stop_event.is_set():
        await run_poll_cycle(inventory, metrics, name_filter, fail_fast)

        next_tick += period
        now = loop.time()
        if next_tick < now:
            logger.warning(
                f"Poll cycle overran the {period}s period, skipping missed ticks"
            )
            next_tick = now

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=next_tick - now)
        except asyncio.TimeoutError:
            continue

    logger.info("Subnet poller stopped")


async def run_poll_cycle(
    inventory: SubnetInventory,
    metrics: SubnetMetrics,
    name_filter: str,
    fail_fast: bool = True,
) -> int:
    """
    Run one poll cycle over all matching subnets.

    Gauges of a subnet are all published before the next subnet is fetched.

    Returns:
        Number of subnets published.
    """
    try:
        subnets = await asyncio.to_thread(inventory.list_subnets, name_filter)
    except InventoryError as e:
        if fail_fast:
            raise
        logger.error(f"Skipping poll cycle: {e}")
        metrics.record_error()
        return 0

    published = 0
    for subnet in subnets:
        try:
            occupancy = await collect_subnet(inventory, subnet)
        except SubnetExporterError as e:
            if fail_fast:
                raise
            logger.error(f"Skipping subnet {subnet.subnet_id}: {e}")
            metrics.record_error(subnet.subnet_id)
            continue

        metrics.publish(subnet, occupancy)
        published += 1

    logger.debug(f"Poll cycle published {published}/{len(subnets)} subnets")
    return published


async def collect_subnet(
    inventory: SubnetInventory, subnet: Subnet
) -> SubnetOccupancy:
    """Fetch the interfaces of a subnet and analyze its prefix occupancy."""
    logger.debug(f"Processing subnet: {subnet.subnet_id}")
    interfaces = await asyncio.to_thread(inventory.list_interfaces, subnet.subnet_id)
    return analyze_subnet(subnet, interfaces)
