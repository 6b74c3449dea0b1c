"""Command line entry point: refresh the node table and serve it over HTTP."""

from __future__ import annotations

import argparse
import functools
import logging
import threading
import time

from .cache import Cache
from .constants import BIND, DB_PATH, IP, RETRIEVE_NODES_URL, TIME_UPDATE
from .db_ops import DbError, create_db, db_updater
from .mempool import NetworkError, fetch_nodes
from .server import listener, serve

logger = logging.getLogger(__name__)

_BIND_RETRY_DELAY = 1.0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lnnodes", description="Serve Lightning node rankings as JSON."
    )
    parser.add_argument("--db", default=DB_PATH, help="SQLite database file")
    parser.add_argument("--host", default=IP, help="address to listen on")
    parser.add_argument("--port", type=int, default=BIND, help="port to listen on")
    parser.add_argument("--url", default=RETRIEVE_NODES_URL, help="upstream node list URL")
    parser.add_argument(
        "--interval", type=float, default=TIME_UPDATE, help="seconds between refreshes"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the service; returns a process exit status."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        db = create_db(args.db)
    except DbError as exc:
        logger.error("Cannot open database %s: %s", args.db, exc)
        return 1

    cache = Cache()
    lock = threading.Lock()
    db_updater(
        db,
        lock,
        cache,
        fetch=functools.partial(fetch_nodes, args.url),
        interval=args.interval,
    )

    address = f"{args.host}:{args.port}"
    while True:
        try:
            sock = listener(address)
            break
        except NetworkError as exc:
            logger.error("Error on call listener: %s", exc)
            time.sleep(_BIND_RETRY_DELAY)

    with sock:
        serve(sock, cache, db, lock)
    return 0