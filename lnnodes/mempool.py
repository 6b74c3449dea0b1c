"""Client for the upstream Lightning node ranking API."""

from __future__ import annotations

import json
import urllib.error
import urllib.request

from .constants import RETRIEVE_NODES_URL
from .node import Node


class NetworkError(Exception):
    """Raised when the node list cannot be retrieved or understood."""


def fetch_nodes(url: str = RETRIEVE_NODES_URL, timeout: float = 30.0) -> list[Node]:
    """Download and decode the node list from ``url``."""
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            body = response.read()
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise NetworkError(f"failed to retrieve nodes from {url}: {exc}") from exc
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise NetworkError(f"invalid JSON from {url}: {exc}") from exc
    if not isinstance(payload, list):
        raise NetworkError(f"expected a JSON array from {url}")
    try:
        return [Node.from_json(item) for item in payload]
    except ValueError as exc:
        raise NetworkError(f"invalid node record from {url}: {exc}") from exc