"""
Base API for LBaaS resource families.

Each family (backends, servers, ...) lives under its own JSON endpoint and
shares the same listing, lookup and write semantics; subclasses only name
the endpoint and their models.
"""

import logging
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from anxcloud.client import AnxcloudClient
from anxcloud.errors import DecodeError
from anxcloud.lbaas.common import OPT_NAME_FILTER, OPT_NAME_SEARCH
from anxcloud.pagination import Page, decode_page

logger = logging.getLogger(__name__)

InfoT = TypeVar("InfoT", bound=BaseModel)
ModelT = TypeVar("ModelT", bound=BaseModel)
DefinitionT = TypeVar("DefinitionT", bound=BaseModel)


class ResourceRef(BaseModel):
    """Reference to a related resource as embedded by the engine."""

    model_config = ConfigDict(extra="allow")

    identifier: str
    name: str = ""


class ResourceInfo(BaseModel):
    """Listing entry of an LBaaS resource."""

    model_config = ConfigDict(extra="allow")

    identifier: str
    name: str


class LBaaSAPI(Generic[InfoT, ModelT, DefinitionT]):
    """
    Pageable CRUD API over one LBaaS endpoint.

    Implements ``Pageable[InfoT]`` so it can be used with ``loop_until`` and
    ``stream_async``.
    """

    path: ClassVar[str]
    info_model: ClassVar[type[BaseModel]]
    model: ClassVar[type[BaseModel]]
    resource_name: ClassVar[str] = "resource"

    def __init__(
        self,
        client: AnxcloudClient,
        search: str | None = None,
        filter: str | None = None,
    ):
        """
        Args:
            client: Authenticated API client
            search: Optional search term applied to every page request
            filter: Optional filter expression applied to every page request
        """
        self.client = client
        self.search = search
        self.filter = filter

    async def get_page(self, page: int, limit: int) -> Page[InfoT]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if self.search:
            params[OPT_NAME_SEARCH] = self.search
        if self.filter:
            params[OPT_NAME_FILTER] = self.filter

        payload = await self.client.get_json(self.path, params=params)
        result = decode_page(payload, self.info_model)
        logger.debug(
            f"Fetched {self.resource_name} page {result.num}/{result.total} "
            f"({len(result.content)} items)"
        )
        return result

    async def next_page(self, page: Page[InfoT]) -> Page[InfoT]:
        return await self.get_page(page.num + 1, page.size)

    async def get_by_id(self, identifier: str) -> ModelT:
        payload = await self.client.get_json(f"{self.path}/{identifier}")
        return self._decode(payload)

    async def create(self, definition: DefinitionT) -> ModelT:
        payload = await self.client.send_json(
            "POST", self.path, definition.model_dump(mode="json", exclude_none=True)
        )
        logger.info(f"Created {self.resource_name} {getattr(definition, 'name', '')}")
        return self._decode(payload)

    async def update(self, identifier: str, definition: DefinitionT) -> ModelT:
        payload = await self.client.send_json(
            "PUT",
            f"{self.path}/{identifier}",
            definition.model_dump(mode="json", exclude_none=True),
        )
        return self._decode(payload)

    async def delete_by_id(self, identifier: str) -> None:
        await self.client.send_json("DELETE", f"{self.path}/{identifier}")
        logger.info(f"Deleted {self.resource_name} {identifier}")

    def _decode(self, payload: Any) -> ModelT:
        try:
            return self.model.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(
                f"could not parse {self.resource_name} response: {e}"
            ) from e
