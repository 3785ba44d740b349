"""LBaaS servers: the individual targets inside a backend."""

from pydantic import BaseModel, ConfigDict

from anxcloud.lbaas.common import State
from anxcloud.lbaas.resource import LBaaSAPI, ResourceInfo, ResourceRef

PATH = "/api/LBaaS/v1/server.json"


class ServerInfo(ResourceInfo):
    """Server as returned by the paged listing."""


class Server(BaseModel):
    model_config = ConfigDict(extra="allow")

    identifier: str
    name: str
    ip: str | None = None
    port: int | None = None
    check: str | None = None
    backend: ResourceRef | None = None
    state: State | None = None
    customer_identifier: str | None = None
    reseller_identifier: str | None = None


class ServerDefinition(BaseModel):
    """Payload for creating or updating a server."""

    name: str
    state: State
    ip: str
    port: int
    backend: str
    check: str | None = None


class ServerAPI(LBaaSAPI[ServerInfo, Server, ServerDefinition]):
    path = PATH
    info_model = ServerInfo
    model = Server
    resource_name = "server"
