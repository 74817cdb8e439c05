"""
aws-subnet-exporter command-line entry point.

Usage:
    aws-subnet-exporter [OPTIONS]

Every option can also be set through an AWS_SUBNET_EXPORTER_* environment
variable. AWS credentials come from the standard AWS credential chain.
"""

from typing import Annotated

import typer

from aws_subnet_exporter import __version__
from aws_subnet_exporter.config import config
from aws_subnet_exporter.exceptions import ConfigurationError, SubnetExporterError
from aws_subnet_exporter.models.enums import LogLevel
from aws_subnet_exporter.utils.duration import parse_duration
from aws_subnet_exporter.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="aws-subnet-exporter",
    help="Prometheus exporter for AWS subnet IP and /28 prefix availability",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool):
    if value:
        typer.echo(f"aws-subnet-exporter v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    port: Annotated[
        str,
        typer.Option(
            "--port",
            help="The port to listen on for HTTP requests.",
            envvar="AWS_SUBNET_EXPORTER_PORT",
        ),
    ] = "8080",
    region: Annotated[
        str,
        typer.Option(
            "--region", help="AWS region.", envvar="AWS_SUBNET_EXPORTER_REGION"
        ),
    ] = "eu-west-2",
    name_filter: Annotated[
        str,
        typer.Option(
            "--filter",
            help=(
                "AWS wildcard pattern ('*' and '?') matched against the subnet "
                "Name tag by the EC2 API. Not a regular expression."
            ),
            envvar="AWS_SUBNET_EXPORTER_FILTER",
        ),
    ] = "*",
    period: Annotated[
        str,
        typer.Option(
            "--period",
            help="Interval between AWS polls, e.g. 60s, 5m, 1m30s.",
            envvar="AWS_SUBNET_EXPORTER_PERIOD",
        ),
    ] = "60s",
    debug: Annotated[
        bool,
        typer.Option(
            "--debug", help="Enable debug logging.", envvar="AWS_SUBNET_EXPORTER_DEBUG"
        ),
    ] = False,
    bind: Annotated[
        str,
        typer.Option(
            "--bind",
            help="Address the HTTP server binds to.",
            envvar="AWS_SUBNET_EXPORTER_BIND",
        ),
    ] = "0.0.0.0",
    fail_fast: Annotated[
        bool,
        typer.Option(
            "--fail-fast/--no-fail-fast",
            help="Exit on the first polling error instead of skipping the subnet.",
            envvar="AWS_SUBNET_EXPORTER_FAIL_FAST",
        ),
    ] = True,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
):
    """
    Export per-subnet IP and /28 prefix availability on /metrics.
    """
    from aws_subnet_exporter.app import run

    try:
        config.set_port(port)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="--port")
    try:
        config.set_period(parse_duration(period))
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="--period")
    config.REGION = region
    config.FILTER = name_filter
    config.BIND_IP = bind
    config.FAIL_FAST = fail_fast
    config.LOG_LEVEL = LogLevel.DEBUG if debug else LogLevel.INFO

    try:
        run(config)
    except KeyboardInterrupt:
        logger.info("Exporter interrupted, shutting down")
    except SubnetExporterError as e:
        logger.error(f"Exporter terminated: {e}")
        raise typer.Exit(1)


def run_cli():
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    run_cli()
