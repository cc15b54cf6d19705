"""Minimal OpenStack identity and networking API clients"""
from .exceptions import OpenStackError, AuthError, ApiError, EndpointNotFound
from .session import AuthState, KeystoneSession
from .neutron import NeutronClient

__all__ = [
    'OpenStackError',
    'AuthError',
    'ApiError',
    'EndpointNotFound',
    'AuthState',
    'KeystoneSession',
    'NeutronClient'
]
