"""Fixed settings shared across the service."""

DB_PATH = "./nodes.db"
RETRIEVE_NODES_URL = "https://mempool.space/api/v1/lightning/nodes/rankings/connectivity"
END_POINT = "GET /nodes"
IP = "127.0.0.1"
BIND = 8080
TIME_UPDATE = 10.0
"""Seconds between two refreshes of the node table."""