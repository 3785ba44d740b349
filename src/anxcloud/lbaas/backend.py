"""LBaaS backends: pools of servers a frontend balances onto."""

from pydantic import BaseModel, ConfigDict

from anxcloud.lbaas.common import Mode, State
from anxcloud.lbaas.resource import LBaaSAPI, ResourceInfo, ResourceRef

PATH = "/api/LBaaS/v1/backend.json"


class BackendInfo(ResourceInfo):
    """Backend as returned by the paged listing."""


class Backend(BaseModel):
    model_config = ConfigDict(extra="allow")

    identifier: str
    name: str
    load_balancer: ResourceRef | None = None
    health_check: str | None = None
    mode: Mode | None = None
    server_timeout: int | None = None
    state: State | None = None
    customer_identifier: str | None = None
    reseller_identifier: str | None = None


class BackendDefinition(BaseModel):
    """Payload for creating or updating a backend."""

    name: str
    state: State
    load_balancer: str
    mode: Mode
    health_check: str | None = None
    server_timeout: int | None = None


class BackendAPI(LBaaSAPI[BackendInfo, Backend, BackendDefinition]):
    path = PATH
    info_model = BackendInfo
    model = Backend
    resource_name = "backend"
