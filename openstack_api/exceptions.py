"""Exceptions raised by the OpenStack API layer"""
from typing import Optional


class OpenStackError(Exception):
    """Base class for OpenStack API failures"""


class AuthError(OpenStackError):
    """Keystone rejected the credentials or could not be reached"""


class EndpointNotFound(OpenStackError):
    """The service catalog has no usable endpoint for a service type"""

    def __init__(self, service_type: str, interface: str, region: Optional[str] = None):
        self.service_type = service_type
        self.interface = interface
        self.region = region
        where = f" in region {region}" if region else ""
        super().__init__(f"No {interface} endpoint for service type '{service_type}'{where}")


class ApiError(OpenStackError):
    """A request against a service endpoint failed"""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)
