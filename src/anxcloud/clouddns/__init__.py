"""
Cloud DNS zones and records.
"""

from .zone import Record, RecordRequest, Revision, Zone, ZoneAPI

__all__ = ["Record", "RecordRequest", "Revision", "Zone", "ZoneAPI"]
