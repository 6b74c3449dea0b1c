"""SQLite storage for node records and the periodic refresh task."""

from __future__ import annotations

import enum
import logging
import sqlite3
import threading
import time
from typing import Any, Callable, Iterable

from .constants import DB_PATH, TIME_UPDATE
from .mempool import NetworkError, fetch_nodes
from .node import Node

logger = logging.getLogger(__name__)

_CREATE_SQL = (
    "CREATE TABLE IF NOT EXISTS node "
    "(pubkey TEXT PRIMARY KEY, alias TEXT, capacity INTEGER, first_seen INTEGER)"
)
_INSERT_SQL = (
    "INSERT INTO node (pubkey, alias, capacity, first_seen) VALUES (?, ?, ?, ?) "
    "ON CONFLICT(pubkey) DO UPDATE SET capacity = excluded.capacity, "
    "first_seen = excluded.first_seen"
)
_SELECT_SQL = "SELECT pubkey, alias, capacity, first_seen FROM node"
_SELECT_ORDERED_SQL = _SELECT_SQL + " ORDER BY capacity"


class DbErrorKind(enum.Enum):
    CREATE = "CreateError"
    INSERT = "InsertError"
    RETRIEVE = "RetriveError"
    UPDATE = "UpdateError"


class DbError(Exception):
    """A database operation failed; ``kind`` says which one."""

    def __init__(self, kind: DbErrorKind, detail: str | None = None) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.detail = detail

    def __str__(self) -> str:
        return self.kind.value


def create_db(path: str = DB_PATH) -> sqlite3.Connection:
    """Open the database at ``path`` and make sure the node table exists."""
    try:
        conn = sqlite3.connect(path, check_same_thread=False)
    except sqlite3.Error as exc:
        logger.error("Error on connection: %s", exc)
        raise DbError(DbErrorKind.CREATE, str(exc)) from exc
    try:
        conn.execute(_CREATE_SQL)
        conn.commit()
    except sqlite3.Error as exc:
        conn.close()
        logger.error("Error on create table: %s", exc)
        raise DbError(DbErrorKind.CREATE, str(exc)) from exc
    return conn


def insert_db(conn: sqlite3.Connection, nodes: Iterable[Node]) -> None:
    """Upsert nodes in one transaction; the alias of a known node is kept."""
    rows = [(n.pub_key, n.alias, n.capacity, n.first_seen) for n in nodes]
    if not rows:
        return
    try:
        with conn:
            conn.executemany(_INSERT_SQL, rows)
    except (sqlite3.Error, OverflowError) as exc:
        logger.error("Error on insert nodes: %s", exc)
        raise DbError(DbErrorKind.INSERT, str(exc)) from exc


def _row_to_node(row: tuple[Any, ...]) -> Node | None:
    pub_key, alias, capacity, first_seen = row
    if not isinstance(pub_key, str) or not isinstance(alias, str):
        return None
    if not isinstance(capacity, int) or capacity < 0 or not isinstance(first_seen, int):
        return None
    return Node(pub_key=pub_key, alias=alias, capacity=capacity, first_seen=first_seen)


def _select(conn: sqlite3.Connection, sql: str) -> list[Node]:
    try:
        rows = conn.execute(sql).fetchall()
    except sqlite3.Error as exc:
        logger.error("Error on retrieve nodes: %s", exc)
        raise DbError(DbErrorKind.RETRIEVE, str(exc)) from exc
    return [node for node in map(_row_to_node, rows) if node is not None]


def retrieve_db(conn: sqlite3.Connection) -> list[Node]:
    """Return every stored node whose columns are well formed."""
    return _select(conn, _SELECT_SQL)


def retrieve_db_order_by(conn: sqlite3.Connection) -> list[Node]:
    """Return the stored nodes in ascending order of capacity."""
    return _select(conn, _SELECT_ORDERED_SQL)


def db_updater(
    db: sqlite3.Connection,
    lock: threading.Lock,
    cache: Any,
    fetch: Callable[[], list[Node]] = fetch_nodes,
    interval: float = TIME_UPDATE,
) -> threading.Thread:
    """Start a daemon thread that refreshes the table every ``interval`` seconds.

    Each round fetches nodes, stores them and marks ``cache`` as expired, all
    while holding ``lock``. The thread stops at the first failure.
    """

    def run() -> None:
        while True:
            try:
                with lock:
                    nodes = fetch()
                    insert_db(db, nodes)
                    cache.expired = True
            except (NetworkError, DbError) as exc:
                logger.error("Error on update database: %s", exc)
                return
            print("Database Update")
            time.sleep(interval)

    thread = threading.Thread(target=run, name="db-updater", daemon=True)
    thread.start()
    return thread