"""Registry that builds the enabled exporters and wires them into Prometheus"""
from typing import Callable, Dict, List, Optional, Type
from prometheus_client import CollectorRegistry
from collectors.base import BaseOpenStackExporter, ConfigurationError
from collectors.neutron import NeutronExporter
from config import Config
from logging_config import get_logger
from openstack_api.session import KeystoneSession


logger = get_logger(__name__)


EXPORTERS: Dict[str, Type[BaseOpenStackExporter]] = {
    "neutron": NeutronExporter,
}


class ExporterRegistry:
    """Central registry for all OpenStack exporters"""

    def __init__(self, config: Config, session_factory: Optional[Callable[[Config], KeystoneSession]] = None):
        self.config = config
        self.session_factory = session_factory or KeystoneSession
        self.exporters: Dict[str, BaseOpenStackExporter] = {}
        self.prometheus_registry = CollectorRegistry()

        for name in config.enabled_exporters:
            self.register_exporter(self.build_exporter(name))

    def build_exporter(self, name: str) -> BaseOpenStackExporter:
        """Instantiate an exporter with its own session"""
        exporter_class = EXPORTERS.get(name)
        if exporter_class is None:
            raise ConfigurationError(
                f"Unknown exporter '{name}', available: {', '.join(sorted(EXPORTERS))}"
            )
        return exporter_class(self.session_factory(self.config), self.config.metrics_prefix, self.config)

    def register_exporter(self, exporter: BaseOpenStackExporter):
        """Register an exporter with the Prometheus collector registry"""
        if not isinstance(exporter, BaseOpenStackExporter):
            raise ConfigurationError("Exporter must inherit from BaseOpenStackExporter")
        if exporter.name in self.exporters:
            raise ConfigurationError(f"Exporter '{exporter.name}' is already registered")

        try:
            self.prometheus_registry.register(exporter)
        except ValueError as e:
            raise ConfigurationError(f"Cannot register exporter '{exporter.name}': {e}") from e

        self.exporters[exporter.name] = exporter
        logger.info("Registered exporter", exporter=exporter.name, metrics=len(exporter.metrics))

    def get_exporter(self, name: str) -> Optional[BaseOpenStackExporter]:
        return self.exporters.get(name)

    def list_exporters(self) -> List[str]:
        return list(self.exporters.keys())

    def get_exporter_status(self) -> Dict[str, Dict]:
        """Get status information for all exporters"""
        return {name: exporter.get_status() for name, exporter in self.exporters.items()}

    def close(self):
        """Close the sessions held by every exporter"""
        for exporter in self.exporters.values():
            try:
                exporter.close()
            except Exception as e:
                logger.error("Failed to close exporter", exporter=exporter.name, error=str(e))
