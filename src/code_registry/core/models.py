"""
Core data models for Code Registry.

A message code carries its own audit trail: who created it and when,
and who last touched it and when.
"""

import ipaddress
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, IPvAnyAddress

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

_NS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ns_to_datetime(ns: int) -> datetime:
    """Convert nanoseconds since the Unix epoch to an aware UTC datetime (microsecond resolution)."""
    seconds, remainder = divmod(ns, _NS_PER_SECOND)
    return _EPOCH + timedelta(seconds=seconds, microseconds=remainder // 1000)


def parse_address(host: str | None) -> IPAddress | None:
    """
    Parse a peer host string into an IP address.

    Hosts that are not IP literals yield None, the same way an
    unparseable remote address is recorded as no address at all.
    """
    if not host:
        return None
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None


class MessageCode(BaseModel):
    """One registry entry with its audit metadata."""

    code: int = Field(ge=0, description="Dense id, assigned as the table size at creation")
    deleted: bool = False
    title: str = Field(min_length=1)
    description: str = ""
    # Nanoseconds since the Unix epoch, UTC
    created: int
    created_ip: IPvAnyAddress | None = None
    modified: int
    modified_ip: IPvAnyAddress | None = None

    @property
    def created_at(self) -> datetime:
        """Creation time as an aware UTC datetime."""
        return ns_to_datetime(self.created)

    @property
    def modified_at(self) -> datetime:
        """Last modification time as an aware UTC datetime."""
        return ns_to_datetime(self.modified)

    def touch(self, now_ns: int, source_addr: IPAddress | None) -> None:
        """Stamp a modification made at now_ns from source_addr."""
        self.modified = now_ns
        self.modified_ip = source_addr
