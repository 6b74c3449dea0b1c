import json
from datetime import datetime

import pytest

from lnnodes.node import Node, format_capacity, format_timestamp, nodes_to_json

PUB_KEY = "03864ef025fde8fb587d989186ce6a4a186895ee44a926bfc370e2c366597a3f8f"


def make_node():
    return Node(pub_key=PUB_KEY, alias="ACINQ", capacity=2908, first_seen=1522941222)


def test_format_timestamp_epoch():
    assert format_timestamp(0) == "1970-01-01T00:00:00+00:00"


def test_format_timestamp_round_trip():
    text = format_timestamp(1522941222)
    assert int(datetime.fromisoformat(text).timestamp()) == 1522941222
    assert text.endswith("+00:00")


def test_format_timestamp_invalid():
    with pytest.raises(ValueError):
        format_timestamp(10**15)


def test_format_capacity_one_bitcoin():
    assert format_capacity(100_000_000) == 1.0


def test_format_capacity_scales_back():
    assert format_capacity(2908) * 100_000_000 == pytest.approx(2908)
    assert format_capacity(0) == 0


def test_to_json_keys_and_values():
    data = make_node().to_json()
    assert set(data) == {"publicKey", "alias", "capacity", "firstSeen"}
    assert data["publicKey"] == PUB_KEY
    assert data["alias"] == "ACINQ"
    assert data["capacity"] == format_capacity(2908)
    assert data["firstSeen"] == format_timestamp(1522941222)


def test_from_json_reads_upstream_record():
    record = {
        "publicKey": PUB_KEY,
        "alias": "ACINQ",
        "capacity": 2908,
        "firstSeen": 1522941222,
        "channels": 12,
        "city": None,
    }
    assert Node.from_json(record) == make_node()


@pytest.mark.parametrize(
    "record",
    [
        {"alias": "ACINQ", "capacity": 1, "firstSeen": 1},
        {"publicKey": PUB_KEY, "alias": "ACINQ", "capacity": -1, "firstSeen": 1},
        {"publicKey": PUB_KEY, "alias": "ACINQ", "capacity": "1", "firstSeen": 1},
        {"publicKey": PUB_KEY, "alias": 3, "capacity": 1, "firstSeen": 1},
        {"publicKey": PUB_KEY, "alias": "ACINQ", "capacity": 1, "firstSeen": True},
    ],
)
def test_from_json_rejects_bad_records(record):
    with pytest.raises(ValueError):
        Node.from_json(record)


def test_nodes_to_json_empty():
    assert nodes_to_json([]) == "[]"


def test_nodes_to_json_matches_to_json():
    nodes = [make_node(), Node("02ab", "ñode", 5, 0)]
    text = nodes_to_json(nodes)
    assert json.loads(text) == [node.to_json() for node in nodes]
    assert "ñode" in text
    assert "\n  {" in text