"""Shared fixtures: environment for Config and a fake OpenStack cloud"""
from typing import Callable, Dict, List, Optional, Set
import httpx
import pytest

from config import Config
from openstack_api.session import KeystoneSession


OS_ENV = {
    "OS_AUTH_URL": "http://keystone:5000",
    "OS_USERNAME": "exporter",
    "OS_PASSWORD": "secret",
    "OS_PROJECT_NAME": "admin",
    "OS_REGION_NAME": "RegionOne",
}


class FakeCloud:
    """Keystone and Neutron served from memory through httpx.MockTransport"""

    def __init__(self):
        self.auth_status = 201
        self.auth_unreachable = False
        self.catalog: List[Dict] = [
            {
                "type": "network",
                "name": "neutron",
                "endpoints": [
                    {"interface": "internal", "region": "RegionOne", "url": "http://neutron-internal:9696"},
                    {"interface": "public", "region": "RegionOne", "url": "http://neutron:9696/"},
                ],
            },
            {
                "type": "compute",
                "name": "nova",
                "endpoints": [{"interface": "public", "region": "RegionOne", "url": "http://nova:8774/v2.1"}],
            },
        ]
        self.resources: Dict[str, List[Dict]] = {
            "floatingips": [],
            "agents": [],
            "networks": [],
            "security-groups": [],
            "subnets": [],
        }
        self.failing: Set[str] = set()
        self.requests: List[httpx.Request] = []
        self.tokens_issued = 0
        self.on_resource_request: Optional[Callable[[httpx.Request], None]] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/v3/auth/tokens":
            if self.auth_unreachable:
                raise httpx.ConnectError("connection refused", request=request)
            if self.auth_status >= 400:
                return httpx.Response(self.auth_status, json={"error": {"code": self.auth_status}})
            self.tokens_issued += 1
            return httpx.Response(
                201,
                headers={"X-Subject-Token": f"token-{self.tokens_issued}"},
                json={"token": {"expires_at": "2030-01-01T00:00:00Z", "catalog": self.catalog}},
            )

        if request.headers.get("X-Auth-Token") not in self.issued_tokens():
            return httpx.Response(401)

        if self.on_resource_request:
            self.on_resource_request(request)

        resource = request.url.path.rsplit("/", 1)[-1]
        if resource in self.failing:
            return httpx.Response(503, text="service unavailable")
        if resource not in self.resources:
            return httpx.Response(404)
        return httpx.Response(200, json={resource.replace("-", "_"): self.resources[resource]})

    def issued_tokens(self) -> Set[str]:
        return {f"token-{n}" for n in range(1, self.tokens_issued + 1)}

    def session(self, config: Config) -> KeystoneSession:
        return KeystoneSession(config, transport=httpx.MockTransport(self.handler))

    def resource_requests(self) -> List[str]:
        return [r.url.path for r in self.requests if r.url.path != "/v3/auth/tokens"]


@pytest.fixture(autouse=True)
def openstack_env(monkeypatch):
    """Provide the required OpenStack credentials to every Config()"""
    for key, value in OS_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def config(openstack_env):
    return Config()


@pytest.fixture
def fake_cloud():
    return FakeCloud()
