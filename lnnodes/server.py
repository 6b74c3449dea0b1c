"""Minimal HTTP endpoint that serves the cached node list as JSON."""

from __future__ import annotations

import logging
import socket
import sqlite3
import threading

from .cache import Cache
from .constants import END_POINT
from .mempool import NetworkError
from .node import nodes_to_json

logger = logging.getLogger(__name__)

_ORDERED_END_POINT = END_POINT + "?order=capacity"
_JSON_HEADER = "HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n\r\n"
_NOT_FOUND = "HTTP/1.1 404 Not Found\r\nContent-Type: text/plain\r\n\r\nEndpoint not found"
_BUFFER_SIZE = 1024


def build_response(request: str, json_all: str, json_order_by: str) -> bytes:
    """Choose the reply for a raw request text."""
    if request.startswith(_ORDERED_END_POINT):
        text = _JSON_HEADER + json_order_by
    elif request.startswith(END_POINT):
        text = _JSON_HEADER + json_all
    else:
        text = _NOT_FOUND
    return text.encode("utf-8")


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep:
        raise NetworkError(f"invalid address: {address!r}")
    try:
        return host, int(port)
    except ValueError as exc:
        raise NetworkError(f"invalid port in address: {address!r}") from exc


def listener(address: str) -> socket.socket:
    """Bind a listening TCP socket to ``host:port``."""
    host, port = _split_address(address)
    try:
        return socket.create_server((host, port))
    except (OSError, OverflowError) as exc:
        logger.error("Error on create listener: %s", exc)
        raise NetworkError(f"cannot listen on {address}: {exc}") from exc


def respond(sock: socket.socket, json_all: str, json_order_by: str) -> None:
    """Read one request from ``sock`` and write the matching reply."""
    try:
        data = sock.recv(_BUFFER_SIZE)
    except OSError as exc:
        logger.error("Failed to read stream: %s", exc)
        raise NetworkError(f"failed to read request: {exc}") from exc
    request = data.decode("utf-8", errors="replace")
    logger.info("Buffer: %s", request)
    try:
        sock.sendall(build_response(request, json_all, json_order_by))
    except OSError as exc:
        logger.error("Error on write response: %s", exc)
        raise NetworkError(f"failed to write response: {exc}") from exc


def serve(
    listener: socket.socket,
    cache: Cache,
    db: sqlite3.Connection,
    lock: threading.Lock,
) -> None:
    """Answer connections one at a time until the listener is closed."""
    while True:
        try:
            conn, _ = listener.accept()
        except OSError as exc:
            if listener.fileno() == -1:
                return
            logger.error("Error on establish stream: %s", exc)
            continue
        with conn:
            try:
                with lock:
                    json_all = nodes_to_json(cache.call_data(db))
                    json_order_by = nodes_to_json(cache.call_data_order_by(db))
            except ValueError as exc:
                logger.error("Error on serialize nodes to json: %s", exc)
                continue
            try:
                respond(conn, json_all, json_order_by)
            except NetworkError as exc:
                logger.error("Error on respond stream: %s", exc)