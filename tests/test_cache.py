import sqlite3

import pytest

from lnnodes.cache import Cache
from lnnodes.db_ops import create_db, insert_db
from lnnodes.node import Node

ACINQ = Node(
    pub_key="03864ef025fde8fb587d989186ce6a4a186895ee44a926bfc370e2c366597a3f8f",
    alias="ACINQ",
    capacity=2908,
    first_seen=1522941222,
)
SMALL = Node(pub_key="aa", alias="small", capacity=10, first_seen=1600000000)


@pytest.fixture
def conn():
    connection = create_db(":memory:")
    yield connection
    connection.close()


def test_new_cache_is_empty_and_fresh():
    cache = Cache()
    assert cache.expired is False
    assert cache.nodes == []


def test_call_data_returns_stored_nodes(conn):
    insert_db(conn, [ACINQ, SMALL])
    cache = Cache(expired=True)
    result = cache.call_data(conn)
    assert sorted(result, key=lambda n: n.pub_key) == sorted([ACINQ, SMALL], key=lambda n: n.pub_key)
    assert cache.expired is False
    assert cache.nodes == result


def test_call_data_order_by_sorts_by_capacity(conn):
    insert_db(conn, [ACINQ, SMALL])
    cache = Cache()
    result = cache.call_data_order_by(conn)
    assert result == [SMALL, ACINQ]
    assert [n.capacity for n in result] == sorted(n.capacity for n in result)


def test_returned_list_is_a_copy(conn):
    insert_db(conn, [ACINQ])
    cache = Cache()
    result = cache.call_data(conn)
    result.clear()
    assert cache.nodes == [ACINQ]


def test_reload_picks_up_new_rows(conn):
    cache = Cache()
    assert cache.call_data(conn) == []
    insert_db(conn, [ACINQ])
    assert cache.call_data(conn) == [ACINQ]


def test_missing_table_yields_empty_list():
    connection = sqlite3.connect(":memory:")
    cache = Cache(expired=True, nodes=[ACINQ])
    assert cache.call_data(connection) == []
    assert cache.nodes == []
    assert cache.expired is False
    assert cache.call_data_order_by(connection) == []
    connection.close()