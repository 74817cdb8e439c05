"""
AWS subnet exporter.

Exports per-subnet IP address and /28 prefix availability as Prometheus
gauges for subnets discovered through the EC2 API.
"""

__version__ = "0.1.0"
