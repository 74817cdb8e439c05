"""
Exporter FastAPI application and server entry point.

The HTTP server and the subnet poller share one event loop:
    - /metrics renders the gauge registry the poller publishes into
    - /healthz reports liveness
    - a poller failure stops the HTTP server and is re-raised
    - the HTTP server stopping (SIGINT/SIGTERM) stops the poller
"""

import asyncio
import contextlib
import signal

import uvicorn
from fastapi import FastAPI

from aws_subnet_exporter import __version__
from aws_subnet_exporter.background.poller import poll_subnets
from aws_subnet_exporter.config import ExporterConfig, config
from aws_subnet_exporter.endpoints import health, metrics as metrics_endpoint
from aws_subnet_exporter.inventory.base import SubnetInventory
from aws_subnet_exporter.inventory.ec2 import EC2Inventory, create_ec2_client
from aws_subnet_exporter.metrics.registry import SubnetMetrics
from aws_subnet_exporter.models.enums import LogLevel
from aws_subnet_exporter.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

METRICS_ENDPOINT = "/metrics"

# Map log levels to uvicorn levels
UVICORN_LEVEL_MAP = {
    LogLevel.FULL: "debug",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARNING: "warning",
}


# =============================================================================
# Application Setup
# =============================================================================


def create_app(metrics: SubnetMetrics) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        metrics: Gauge registry served on /metrics.
    """
    app = FastAPI(
        title="AWS Subnet Exporter",
        description="Prometheus exporter for subnet IP and /28 prefix availability",
        version=__version__,
        docs_url=None,
        redoc_url=None,
    )
    app.state.metrics = metrics

    app.include_router(metrics_endpoint.router, tags=["Metrics"])
    app.include_router(health.router, tags=["Health"])
    return app


# =============================================================================
# Server Lifecycle
# =============================================================================



class ExporterServer(uvicorn.Server):
    """
    uvicorn server that leaves signal handling to the exporter.

    uvicorn re-raises a captured SIGTERM/SIGINT once it has shut down, which
    would kill the process before the poller is stopped. Signals are instead
    routed to ``should_exit`` by ``run_exporter``.
    """

    @contextlib.contextmanager
    def capture_signals(self):
        yield

    def install_signal_handlers(self) -> None:
        pass


def _install_signal_handlers(
    loop: asyncio.AbstractEventLoop, server: uvicorn.Server
) -> list[signal.Signals]:
    """Ask the server to exit on SIGINT/SIGTERM. Returns the signals handled."""

    def handle_exit(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, shutting down")
        server.should_exit = True

    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handle_exit, sig)
        except (NotImplementedError, RuntimeError, ValueError):
            # Not supported on this platform or outside the main thread
            logger.debug(f"Cannot install handler for {sig.name}")
            continue
        installed.append(sig)
    return installed


async def run_exporter(
    app: FastAPI,
    inventory: SubnetInventory,
    metrics: SubnetMetrics,
    cfg: ExporterConfig,
) -> None:
    """
    Run the HTTP server and the subnet poller until either stops.

    SIGINT/SIGTERM stop the HTTP server, which in turn stops the poller, and
    the call returns normally.

    Raises:
        SubnetExporterError: If the poller fails (fail-fast mode).
    """
    server = ExporterServer(
        uvicorn.Config(
            app,
            host=cfg.BIND_IP,
            port=cfg.PORT,
            log_level=UVICORN_LEVEL_MAP.get(cfg.LOG_LEVEL, "info"),
            log_config=None,  # Disable uvicorn's default logging config (use loguru)
        )
    )
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop, server)

    poller = asyncio.create_task(
        poll_subnets(
            inventory,
            metrics,
            cfg.FILTER,
            cfg.PERIOD_SECONDS,
            stop_event,
            fail_fast=cfg.FAIL_FAST,
        ),
        name="subnet-poller",
    )
    server_task = asyncio.create_task(server.serve(), name="http-server")

    try:
        done, _ = await asyncio.wait(
            {poller, server_task}, return_when=asyncio.FIRST_COMPLETED
        )

        if poller in done:
            logger.error("Subnet poller stopped, shutting down HTTP server")
            server.should_exit = True
            await server_task
            # Re-raise the poller failure
            poller.result()
            return

        logger.info("HTTP server stopped, stopping subnet poller")
        stop_event.set()
        await poller
        server_task.result()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


async def serve(cfg: ExporterConfig = config) -> None:
    """
    Create the AWS client, metrics registry and app, then run the exporter.

    Raises:
        ConfigurationError: If AWS credentials cannot be resolved.
    """
    logger.info(
        f"Starting aws-subnet-exporter: port={cfg.PORT}, region={cfg.REGION}, "
        f"filter={cfg.FILTER}, period={cfg.PERIOD_SECONDS}s, "
        f"endpoint={METRICS_ENDPOINT}"
    )

    client = create_ec2_client(cfg.REGION)
    inventory = EC2Inventory(client)
    metrics = SubnetMetrics()
    app = create_app(metrics)

    logger.info(f"Starting metrics web server on {cfg.BIND_IP}:{cfg.PORT}")
    await run_exporter(app, inventory, metrics, cfg)


# =============================================================================
# Server Entry Points
# =============================================================================


def run(cfg: ExporterConfig = config) -> None:
    """Configure logging and run the exporter until it stops."""
    configure_logging(cfg.LOG_LEVEL)
    asyncio.run(serve(cfg))
