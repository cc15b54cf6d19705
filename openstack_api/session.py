"""Keystone v3 authenticating session"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import httpx
from config import Config
from logging_config import get_logger
from .exceptions import ApiError, AuthError, EndpointNotFound


logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthState:
    """One issued Keystone token together with the catalog it came with"""
    token: str
    catalog: Tuple[Dict[str, Any], ...]
    expires_at: Optional[str] = None

    def endpoint_for(self, service_type: str, interface: str, region: Optional[str] = None) -> str:
        """Resolve the catalog URL of a service for an interface and, optionally, a region"""
        for service in self.catalog:
            if not isinstance(service, dict) or service.get("type") != service_type:
                continue
            for endpoint in service.get("endpoints") or []:
                if not isinstance(endpoint, dict) or endpoint.get("interface") != interface:
                    continue
                if region and region not in (endpoint.get("region"), endpoint.get("region_id")):
                    continue
                url = endpoint.get("url")
                if url:
                    return url.rstrip("/")

        raise EndpointNotFound(service_type, interface, region)


class KeystoneSession:
    """Obtains Keystone tokens and issues authenticated requests.

    The token is obtained with password authentication scoped to a project.
    ``authenticate()`` always asks Keystone for a new token, it never checks
    expiry; callers decide when to re-authenticate. The current ``AuthState``
    is only ever replaced as a whole, after Keystone answered successfully,
    so a failed attempt leaves the previous token in place for anyone
    already using it.
    """

    def __init__(self, config: Config, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._http = httpx.Client(
            timeout=config.http_timeout,
            verify=config.verify_tls,
            transport=transport,
            headers={"Accept": "application/json", "User-Agent": f"{config.service_name}/{config.service_version}"}
        )
        self.auth: Optional[AuthState] = None

    @property
    def is_authenticated(self) -> bool:
        return self.auth is not None

    def _auth_body(self) -> Dict[str, Any]:
        return {
            "auth": {
                "identity": {
                    "methods": ["password"],
                    "password": {
                        "user": {
                            "name": self.config.os_username,
                            "domain": {"name": self.config.os_user_domain_name},
                            "password": self.config.os_password,
                        }
                    },
                },
                "scope": {
                    "project": {
                        "name": self.config.os_project_name,
                        "domain": {"name": self.config.os_project_domain_name},
                    }
                },
            }
        }

    def authenticate(self) -> AuthState:
        """Request a fresh token and catalog and make them the current auth state"""
        url = f"{self.config.os_auth_url}/auth/tokens"
        try:
            response = self._http.post(url, json=self._auth_body())
        except httpx.HTTPError as e:
            raise AuthError(f"Keystone request to {url} failed: {e}") from e

        if response.status_code >= 400:
            raise AuthError(f"Keystone returned HTTP {response.status_code} for {url}")

        token = response.headers.get("X-Subject-Token")
        if not token:
            raise AuthError("Keystone response is missing the X-Subject-Token header")

        try:
            body = response.json()
        except ValueError as e:
            raise AuthError(f"Keystone returned an invalid token body: {e}") from e

        token_data = body.get("token") if isinstance(body, dict) else None
        if not isinstance(token_data, dict):
            raise AuthError("Keystone token body is not an object")

        catalog = token_data.get("catalog") or []
        if not isinstance(catalog, list):
            raise AuthError("Keystone token catalog is not a list")

        auth = AuthState(token=token, catalog=tuple(catalog), expires_at=token_data.get("expires_at"))
        self.auth = auth

        logger.debug(
            "Authenticated against Keystone",
            project=self.config.os_project_name,
            expires_at=auth.expires_at,
            services=len(auth.catalog),
        )
        return auth

    def endpoint_for(self, service_type: str) -> str:
        """Resolve a catalog URL from the current auth state"""
        if self.auth is None:
            raise AuthError("Session is not authenticated")
        return self.auth.endpoint_for(service_type, self.config.os_interface, self.config.os_region_name)

    def get(self, url: str, token: str) -> Dict[str, Any]:
        """GET with the given token, returning the decoded JSON body"""
        try:
            response = self._http.get(url, headers={"X-Auth-Token": token})
        except httpx.HTTPError as e:
            raise ApiError(f"GET {url} failed: {e}", url=url) from e

        if response.status_code >= 400:
            raise ApiError(f"GET {url} returned HTTP {response.status_code}", status_code=response.status_code, url=url)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"GET {url} returned invalid JSON: {e}", status_code=response.status_code, url=url) from e

    def close(self) -> None:
        self._http.close()
