"""Base class shared by the OpenStack service exporters"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from config import Config
from metrics.models import MetricDescriptor, MetricType
from openstack_api.session import KeystoneSession


class ConfigurationError(Exception):
    """Raised when an exporter is set up inconsistently"""


class BaseOpenStackExporter(ABC):
    """Prometheus custom collector for one OpenStack service.

    Subclasses register their descriptors in ``__init__`` with
    ``add_metric`` and produce families in ``collect``. Every exposed name
    is ``<prefix>_<exporter name>_<metric name>``.
    """

    def __init__(self, name: str, prefix: str, config: Config, session: KeystoneSession):
        self.name = name
        self.prefix = prefix
        self.config = config
        self.session = session
        self.metrics: Dict[str, MetricDescriptor] = {}

    def full_name(self, metric_name: str) -> str:
        return f"{self.prefix}_{self.name}_{metric_name}"

    def add_metric(self, name: str, labels: Sequence[str] = (), help_text: Optional[str] = None,
                   metric_type: MetricType = MetricType.GAUGE) -> MetricDescriptor:
        """Register a descriptor under its short name"""
        if name in self.metrics:
            raise ConfigurationError(f"Metric '{name}' is already registered for exporter '{self.name}'")

        descriptor = MetricDescriptor(
            name=self.full_name(name),
            labels=tuple(labels),
            help_text=help_text or name,
            metric_type=metric_type,
        )
        self.metrics[name] = descriptor
        return descriptor

    def new_family(self, name: str) -> Metric:
        """Create an empty family for a registered descriptor"""
        descriptor = self.metrics[name]
        if descriptor.metric_type == MetricType.COUNTER:
            family_class = CounterMetricFamily
        else:
            family_class = GaugeMetricFamily
        return family_class(descriptor.name, descriptor.help_text, labels=list(descriptor.labels))

    def add_sample(self, family: Metric, name: str, value: float, label_values: Sequence[str] = ()) -> None:
        """Append one sample to a family, checking it against the descriptor"""
        descriptor = self.metrics[name]
        if len(label_values) != len(descriptor.labels):
            raise ValueError(
                f"Metric '{descriptor.name}' expects labels {list(descriptor.labels)}, got {list(label_values)}"
            )
        family.add_metric(list(label_values), float(value))

    def describe(self) -> List[Metric]:
        """Return every registered descriptor as an empty family; performs no I/O"""
        return [self.new_family(name) for name in self.metrics]

    @abstractmethod
    def collect(self) -> Iterable[Metric]:
        """Scrape the service and yield metric families"""

    def get_status(self) -> Dict[str, object]:
        return {
            "class": self.__class__.__name__,
            "metrics": [descriptor.name for descriptor in self.metrics.values()],
        }

    def close(self) -> None:
        self.session.close()
