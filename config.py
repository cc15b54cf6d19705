"""Configuration for the OpenStack network exporter"""
from pathlib import Path
from typing import List, Literal, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Environment-based settings with Pydantic validation"""

    # OpenStack identity settings (required)
    os_auth_url: str = Field(..., description="Keystone endpoint URL")
    os_username: str = Field(..., description="OpenStack user name")
    os_password: str = Field(..., description="OpenStack user password")
    os_project_name: str = Field(..., description="Project to scope the token to")
    os_user_domain_name: str = Field(default="Default", description="User domain name")
    os_project_domain_name: str = Field(default="Default", description="Project domain name")
    os_region_name: Optional[str] = Field(default=None, description="Region used to pick catalog endpoints")
    os_interface: Literal["public", "internal", "admin"] = Field(default="public", description="Catalog endpoint interface")
    os_insecure: bool = Field(default=False, description="Skip TLS certificate verification")
    http_timeout: float = Field(default=10.0, gt=0, description="Timeout for OpenStack API calls in seconds")

    # Exporter settings
    metrics_prefix: str = Field(default="openstack", description="Prefix for exposed metric names")
    enabled_exporters_str: str = Field(
        default="neutron",
        description="Enabled exporters (comma-separated)"
    )

    # Server settings
    metrics_port: int = Field(default=9180, ge=1, le=65535, description="Metrics server port")
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    # Service settings
    service_name: str = Field(default="openstack-network-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")

    class Config:
        env_prefix = ""
        case_sensitive = False

    @validator('os_auth_url')
    def normalize_auth_url(cls, v):
        """Strip trailing slashes and make sure the URL points at the v3 API"""
        v = v.strip().rstrip('/')
        if not v:
            raise ValueError("OS_AUTH_URL is required")
        if not v.endswith('/v3'):
            v = f"{v}/v3"
        return v

    @validator('metrics_prefix')
    def validate_metrics_prefix(cls, v):
        v = v.strip().strip('_')
        if not v:
            raise ValueError("METRICS_PREFIX must not be empty")
        return v

    @validator('log_file')
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def enabled_exporters(self) -> List[str]:
        """Get enabled exporters as a list"""
        return [item.strip() for item in self.enabled_exporters_str.split(',') if item.strip()]

    @property
    def verify_tls(self) -> bool:
        return not self.os_insecure
