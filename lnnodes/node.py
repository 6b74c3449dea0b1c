"""Lightning node records and their JSON representation."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

SATS_PER_BTC = 100_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_capacity(capacity: int) -> float:
    """Convert a capacity in satoshis to bitcoins."""
    return capacity / SATS_PER_BTC


def format_timestamp(timestamp: int) -> str:
    """Render a Unix timestamp as an RFC 3339 string in UTC."""
    try:
        moment = _EPOCH + timedelta(seconds=timestamp)
    except OverflowError as exc:
        raise ValueError("Invalid timestamp") from exc
    return moment.isoformat()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Node:
    """A Lightning node as stored in the database."""

    pub_key: str
    alias: str
    capacity: int
    first_seen: int

    def to_json(self) -> dict[str, Any]:
        """Return the node as a JSON-ready mapping for API responses."""
        return {
            "publicKey": self.pub_key,
            "alias": self.alias,
            "capacity": format_capacity(self.capacity),
            "firstSeen": format_timestamp(self.first_seen),
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Node":
        """Build a node from an upstream API record; extra keys are ignored."""
        try:
            pub_key = data["publicKey"]
            alias = data["alias"]
            capacity = data["capacity"]
            first_seen = data["firstSeen"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"missing node field: {exc}") from exc
        if not isinstance(pub_key, str):
            raise ValueError("publicKey must be a string")
        if not isinstance(alias, str):
            raise ValueError("alias must be a string")
        if not _is_int(capacity) or capacity < 0:
            raise ValueError("capacity must be a non-negative integer")
        if not _is_int(first_seen):
            raise ValueError("firstSeen must be an integer")
        return cls(pub_key=pub_key, alias=alias, capacity=capacity, first_seen=first_seen)


def nodes_to_json(nodes: Iterable[Node]) -> str:
    """Serialise nodes as a pretty-printed JSON array."""
    return json.dumps([node.to_json() for node in nodes], indent=2, ensure_ascii=False)