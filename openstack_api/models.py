"""Records for the Neutron resources the exporter reads

Only the fields the exporter consumes are kept; the rest of each API
object is dropped while parsing.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FloatingIP:
    id: str
    floating_ip_address: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "FloatingIP":
        return cls(
            id=data.get("id", ""),
            floating_ip_address=data.get("floating_ip_address"),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class Network:
    id: str
    name: str = ""
    status: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Network":
        return cls(id=data.get("id", ""), name=data.get("name") or "", status=data.get("status"))


@dataclass(frozen=True)
class SecurityGroup:
    id: str
    name: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SecurityGroup":
        return cls(id=data.get("id", ""), name=data.get("name") or "")


@dataclass(frozen=True)
class Subnet:
    id: str
    network_id: str = ""
    cidr: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Subnet":
        return cls(id=data.get("id", ""), network_id=data.get("network_id") or "", cidr=data.get("cidr"))


@dataclass(frozen=True)
class Agent:
    """A Neutron agent as reported by GET /v2.0/agents"""
    host: str
    binary: str
    alive: bool
    admin_state_up: bool
    id: str = ""
    agent_type: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Agent":
        return cls(
            host=data.get("host") or "",
            binary=data.get("binary") or "",
            alive=bool(data.get("alive", False)),
            admin_state_up=bool(data.get("admin_state_up", False)),
            id=data.get("id", ""),
            agent_type=data.get("agent_type") or "",
        )

    @property
    def admin_state(self) -> str:
        return "up" if self.admin_state_up else "down"
