"""In-memory copy of the node table served to clients."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Callable

from .db_ops import DbError, retrieve_db, retrieve_db_order_by
from .node import Node

logger = logging.getLogger(__name__)


@dataclass
class Cache:
    """Latest node list read from the database.

    ``expired`` is raised by the updater after each refresh; every read
    reloads from the database and clears it.
    """

    expired: bool = False
    nodes: list[Node] = field(default_factory=list)

    def _reload(
        self,
        conn: sqlite3.Connection,
        query: Callable[[sqlite3.Connection], list[Node]],
    ) -> list[Node]:
        logger.info("Cache expired, making a new request to the database")
        try:
            self.nodes = query(conn)
        except DbError as exc:
            logger.error("Error on cache, failed to retrieve nodes: %s", exc)
            self.nodes = []
        self.expired = False
        return list(self.nodes)

    def call_data(self, conn: sqlite3.Connection) -> list[Node]:
        """Reload and return every stored node."""
        return self._reload(conn, retrieve_db)

    def call_data_order_by(self, conn: sqlite3.Connection) -> list[Node]:
        """Reload and return the stored nodes by ascending capacity."""
        return self._reload(conn, retrieve_db_order_by)