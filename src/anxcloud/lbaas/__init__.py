"""
Load Balancer as a Service (LBaaS) resource families.
"""

from .backend import Backend, BackendAPI, BackendDefinition, BackendInfo
from .common import Mode, State
from .server import Server, ServerAPI, ServerDefinition, ServerInfo

__all__ = [
    "Backend",
    "BackendAPI",
    "BackendDefinition",
    "BackendInfo",
    "Mode",
    "Server",
    "ServerAPI",
    "ServerDefinition",
    "ServerInfo",
    "State",
]
