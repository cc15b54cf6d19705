"""Read-only Neutron v2.0 client"""
from typing import Any, Callable, Dict, List, Optional, TypeVar
from .exceptions import ApiError, AuthError
from .models import Agent, FloatingIP, Network, SecurityGroup, Subnet
from .session import AuthState, KeystoneSession


T = TypeVar("T")


class NeutronClient:
    """Lists networking resources with one fixed token.

    The token and network endpoint are captured when the client is built,
    so re-authenticating the session never changes a client in use; build
    a new client to pick up a new token.
    """

    service_type = "network"

    def __init__(self, session: KeystoneSession, auth: Optional[AuthState] = None):
        auth = auth or session.auth
        if auth is None:
            raise AuthError("Session is not authenticated")
        self.session = session
        self.token = auth.token
        self.endpoint = auth.endpoint_for(self.service_type, session.config.os_interface, session.config.os_region_name)

    def _list(self, path: str, key: str, parse: Callable[[Dict[str, Any]], T]) -> List[T]:
        url = f"{self.endpoint}/v2.0/{path}"
        body = self.session.get(url, self.token)
        if not isinstance(body, dict) or key not in body:
            raise ApiError(f"Response from {url} has no '{key}' collection", url=url)
        try:
            return [parse(item) for item in body[key]]
        except (AttributeError, TypeError) as e:
            raise ApiError(f"Malformed '{key}' collection from {url}: {e}", url=url) from e

    def list_floating_ips(self) -> List[FloatingIP]:
        return self._list("floatingips", "floatingips", FloatingIP.from_api)

    def list_agents(self) -> List[Agent]:
        return self._list("agents", "agents", Agent.from_api)

    def list_networks(self) -> List[Network]:
        return self._list("networks", "networks", Network.from_api)

    def list_security_groups(self) -> List[SecurityGroup]:
        return self._list("security-groups", "security_groups", SecurityGroup.from_api)

    def list_subnets(self) -> List[Subnet]:
        return self._list("subnets", "subnets", Subnet.from_api)
