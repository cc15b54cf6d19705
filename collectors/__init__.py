"""OpenStack service exporters"""
from .base import BaseOpenStackExporter, ConfigurationError
from .neutron import NeutronExporter

__all__ = [
    'BaseOpenStackExporter',
    'ConfigurationError',
    'NeutronExporter'
]
