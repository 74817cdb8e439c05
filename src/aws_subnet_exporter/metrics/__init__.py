"""Prometheus metrics sink."""

from aws_subnet_exporter.metrics.registry import LABELS, METRIC_PREFIX, SubnetMetrics

__all__ = ["LABELS", "METRIC_PREFIX", "SubnetMetrics"]
