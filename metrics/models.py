"""Metric descriptor models"""
from dataclasses import dataclass
from typing import Tuple
from enum import Enum


class MetricType(Enum):
    """Prometheus metric types used by the exporters"""
    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDescriptor:
    """Static metadata for one metric family"""
    name: str
    labels: Tuple[str, ...]
    help_text: str
    metric_type: MetricType = MetricType.GAUGE

    def __post_init__(self):
        # Accept any sequence of label names but store an immutable tuple
        object.__setattr__(self, "labels", tuple(self.labels or ()))
