"""Neutron (networking) exporter"""
from typing import Callable, Iterator, List, TypeVar
from prometheus_client.core import Metric
from config import Config
from logging_config import get_logger
from openstack_api.exceptions import AuthError, OpenStackError
from openstack_api.neutron import NeutronClient
from openstack_api.session import KeystoneSession
from .base import BaseOpenStackExporter


logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_NEUTRON_METRICS = [
    ("floating_ips", (), "Number of floating IPs"),
    ("networks", (), "Number of networks"),
    ("security_groups", (), "Number of security groups"),
    ("subnets", (), "Number of subnets"),
    ("agent_state", ("hostname", "service", "adminState"), "Neutron agent liveness (1 = alive, 0 = dead)"),
]


class NeutronExporter(BaseOpenStackExporter):
    """Exports floating IP, network, security group and subnet counts plus agent state"""

    def __init__(self, session: KeystoneSession, prefix: str, config: Config):
        super().__init__("neutron", prefix, config, session)
        self.client = None

        for name, labels, help_text in DEFAULT_NEUTRON_METRICS:
            self.add_metric(name, labels, help_text)

    def refresh_client(self) -> NeutronClient:
        """Re-authenticate the session and replace the Neutron client with one built from the new token"""
        logger.info("Refreshing auth client in case token has expired", exporter=self.name)
        try:
            auth = self.session.authenticate()
            client = NeutronClient(self.session, auth)
        except OpenStackError as e:
            raise AuthError(f"Error authenticating neutron client: {e}") from e

        self.client = client
        return client

    def _fetch(self, resource: str, message: str, list_call: Callable[[], List[T]]) -> List[T]:
        logger.info(message, exporter=self.name)
        try:
            return list_call()
        except OpenStackError as e:
            logger.error(
                "Neutron list call failed",
                exporter=self.name,
                resource=resource,
                error=str(e),
                event_type="query_error"
            )
            return []

    def collect(self) -> Iterator[Metric]:
        try:
            client = self.refresh_client()
        except AuthError as e:
            logger.error(str(e), exporter=self.name, event_type="auth_error")
            return

        floating_ips = self._fetch("floating_ips", "Fetching floating ips list", client.list_floating_ips)
        agents = self._fetch("agents", "Fetching agents list", client.list_agents)

        agent_state = self.new_family("agent_state")
        for agent in agents:
            self.add_sample(
                agent_state,
                "agent_state",
                1.0 if agent.alive else 0.0,
                (agent.host, agent.binary, agent.admin_state),
            )

        networks = self._fetch("networks", "Fetching list of networks", client.list_networks)
        security_groups = self._fetch("security_groups", "Fetching list of security groups", client.list_security_groups)
        subnets = self._fetch("subnets", "Fetching list of subnets", client.list_subnets)

        yield agent_state

        for name, items in (
            ("subnets", subnets),
            ("floating_ips", floating_ips),
            ("networks", networks),
            ("security_groups", security_groups),
        ):
            family = self.new_family(name)
            self.add_sample(family, name, len(items))
            yield family
