"""
Cloud DNS zones and their records.

Record operations address ``{PATH_PREFIX}/{zone}/records[/{id}]``; writes
answer with the updated zone.
"""

import logging
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from anxcloud.client import AnxcloudClient
from anxcloud.errors import DecodeError

logger = logging.getLogger(__name__)

PATH_PREFIX = "/api/clouddns/v1/zone.json"


class Record(BaseModel):
    model_config = ConfigDict(extra="allow")

    identifier: UUID
    immutable: bool = False
    name: str
    rdata: str
    region: str = ""
    ttl: int | None = None
    type: str


class Revision(BaseModel):
    model_config = ConfigDict(extra="allow")

    identifier: UUID
    serial: int
    state: str
    created_at: str | None = None
    modified_at: str | None = None
    records: list[Record] = Field(default_factory=list)


class Zone(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    zone_name: str | None = None
    is_master: bool = True
    dns_sec_mode: str | None = None
    admin_email: str | None = None
    refresh: int | None = None
    retry: int | None = None
    expire: int | None = None
    ttl: int | None = None
    master_nameserver: str | None = None
    notify_allowed_ips: list[str] = Field(default_factory=list)
    validation_level: int | None = None
    deployment_level: int | None = None
    revisions: list[Revision] = Field(default_factory=list)


class RecordRequest(BaseModel):
    """Payload for creating or updating a record. ``ttl`` is omitted when unset."""

    name: str
    type: str
    rdata: str
    region: str = ""
    ttl: int | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


_record_list = TypeAdapter(list[Record])
_zone = TypeAdapter(Zone)


class ZoneAPI:
    """Record management for Cloud DNS zones."""

    def __init__(self, client: AnxcloudClient):
        self.client = client

    @staticmethod
    def _records_path(zone: str, record_id: UUID | None = None) -> str:
        path = f"{PATH_PREFIX}/{zone}/records"
        if record_id is not None:
            path = f"{path}/{record_id}"
        return path

    async def list_records(self, zone: str) -> list[Record]:
        """
        List all records of a zone.

        Args:
            zone: Zone name, e.g. "example.com"

        Returns:
            Records of the zone's current revision
        """
        payload = await self.client.get_json(self._records_path(zone))
        records = _validate(_record_list, payload, "record list")
        logger.debug(f"Zone {zone} has {len(records)} records")
        return records

    async def new_record(self, zone: str, record: RecordRequest) -> Zone:
        """Create ``record`` in ``zone`` and return the updated zone."""
        payload = await self.client.send_json(
            "POST", self._records_path(zone), record.to_payload()
        )
        logger.info(f"Created {record.type} record {record.name!r} in zone {zone}")
        return _validate(_zone, payload, "record create")

    async def update_record(
        self, zone: str, record_id: UUID, record: RecordRequest
    ) -> Zone:
        """Replace record ``record_id`` of ``zone`` and return the updated zone."""
        payload = await self.client.send_json(
            "PUT", self._records_path(zone, record_id), record.to_payload()
        )
        return _validate(_zone, payload, "record update")

    async def delete_record(self, zone: str, record_id: UUID) -> None:
        """Delete record ``record_id`` from ``zone``."""
        await self.client.send_json("DELETE", self._records_path(zone, record_id))
        logger.info(f"Deleted record {record_id} from zone {zone}")


def _validate(adapter: TypeAdapter, payload: Any, what: str) -> Any:
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise DecodeError(f"could not decode {what} response: {e}") from e
