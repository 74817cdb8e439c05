"""
Exporter configuration.

This module defines the configuration dataclass for the exporter, providing
a centralized place for all configurable parameters.

The CLI updates the global config instance from command-line options before
the server starts.

Usage:
    from aws_subnet_exporter.config import config

    config.PORT = 9100
    config.LOG_LEVEL = LogLevel.DEBUG
"""

from dataclasses import dataclass

from aws_subnet_exporter.exceptions import ConfigurationError
from aws_subnet_exporter.models.enums import LogLevel


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class ExporterConfig:
    """
    Exporter configuration.

    Attributes:
        BIND_IP: IP address the HTTP server binds to.
        PORT: HTTP port serving /metrics and /healthz.
        REGION: AWS region queried for subnets.
        FILTER: AWS wildcard pattern matched against the subnet Name tag.
        PERIOD_SECONDS: Interval between inventory polls.
        LOG_LEVEL: Logging verbosity level.
        FAIL_FAST: Stop the exporter on the first polling error.
    """

    # -------------------------------------------------------------------------
    # Network Configuration
    # -------------------------------------------------------------------------

    BIND_IP: str = "0.0.0.0"
    PORT: int = 8080

    # -------------------------------------------------------------------------
    # AWS Configuration
    # -------------------------------------------------------------------------

    REGION: str = "eu-west-2"

    # Matched server-side by EC2 as a tag filter; '*' and '?' are wildcards
    FILTER: str = "*"

    # -------------------------------------------------------------------------
    # Polling Configuration
    # -------------------------------------------------------------------------

    PERIOD_SECONDS: float = 60.0

    # When False, failing subnets are skipped and counted instead of
    # terminating the process
    FAIL_FAST: bool = True

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------

    LOG_LEVEL: LogLevel = LogLevel.INFO

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def set_port(self, port: str | int) -> None:
        """
        Set the HTTP port from a string or integer.

        Raises:
            ConfigurationError: If the port is not an integer in [1, 65535].
        """
        try:
            value = int(port)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid port '{port}': not an integer")
        if not 1 <= value <= 65535:
            raise ConfigurationError(f"Invalid port {value}: must be 1-65535")
        self.PORT = value

    def set_period(self, seconds: float) -> None:
        """
        Set the poll interval.

        Raises:
            ConfigurationError: If the interval is not positive.
        """
        if seconds <= 0:
            raise ConfigurationError(f"Poll period must be positive, got {seconds}s")
        self.PERIOD_SECONDS = seconds


# =============================================================================
# Global Instance
# =============================================================================

# Global config instance - modify before server startup
config = ExporterConfig()
