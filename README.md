# lnnodes

`lnnodes` keeps a local SQLite copy of the public Lightning Network node
connectivity ranking. It serves that copy as JSON over a minimal HTTP
endpoint. It uses only the standard library.

## Running the service

Start the server with:

    lnnodes

On start it:

- opens the database `./nodes.db`, creating it if needed, and makes sure it
  has a `node` table;
- starts a background thread that fetches the node ranking every 10 seconds.
  It upserts the nodes into the database. A node that is already stored gets
  its capacity and first-seen time refreshed and keeps its alias. After each
  successful round the thread prints `Database Update`;
- listens on `127.0.0.1:8080`. If the address cannot be bound, it retries
  once a second.

Options:

| Option              | Default                                                              |
|---------------------|----------------------------------------------------------------------|
| `--db PATH`         | `./nodes.db`                                                         |
| `--host HOST`       | `127.0.0.1`                                                          |
| `--port PORT`       | `8080`                                                               |
| `--url URL`         | `https://mempool.space/api/v1/lightning/nodes/rankings/connectivity` |
| `--interval SECS`   | `10`                                                                 |

The command exits with status 1 if the database cannot be opened.

## Endpoints

The server chooses its reply by the start of the raw request text:

| Request starts with              | Response                                      |
|----------------------------------|-----------------------------------------------|
| `GET /nodes?order=capacity`      | all stored nodes by ascending capacity, JSON  |
| `GET /nodes`                     | all stored nodes, JSON                        |
| anything else                    | `404 Not Found`, body `Endpoint not found`    |

Each node is shown with its capacity converted from satoshis to bitcoin. Its
first-seen Unix time is shown as an RFC 3339 UTC timestamp:

    [
      {
        "publicKey": "02aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
        "alias": "EXAMPLE",
        "capacity": 2.908e-05,
        "firstSeen": "2018-04-05T15:13:42+00:00"
      }
    ]

## Using it as a library

```python
from lnnodes.db_ops import create_db, insert_db, retrieve_db_order_by
from lnnodes.node import Node, nodes_to_json

conn = create_db("nodes.db")
insert_db(conn, [Node.from_json({
    "publicKey": "02aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
    "alias": "EXAMPLE",
    "capacity": 2908,
    "firstSeen": 1522941222,
})])
print(nodes_to_json(retrieve_db_order_by(conn)))
```

The modules:

- `lnnodes.node`: the `Node` record, with `Node.to_json` and `Node.from_json`.
  `from_json` raises `ValueError` on a missing or malformed field. The module
  also has `format_capacity`, `format_timestamp` and `nodes_to_json`.
- `lnnodes.db_ops`:
  - `create_db`, `insert_db`, `retrieve_db` and `retrieve_db_order_by`. A
    failure raises `DbError`, and its `kind` (a `DbErrorKind`) tells which
    step failed. The retrieve functions skip rows whose columns are not well
    formed.
  - `db_updater(db, lock, cache, fetch, interval)` starts the refresh thread
    and returns it. The thread stops at the first network or database error.
- `lnnodes.mempool`: `fetch_nodes(url, timeout)`. It raises `NetworkError`
  when the ranking cannot be fetched or decoded.
- `lnnodes.cache`: `Cache`. Its `call_data` and `call_data_order_by` reload
  the node list from the database on every call and clear `expired`. If the
  read fails, they return an empty list.
- `lnnodes.server`:
  - `build_response`, which chooses the reply bytes for a request text;
  - `listener`, which binds `host:port`;
  - `respond`, which reads one request and writes the reply;
  - `serve`, which answers connections until the listener is closed.
- `lnnodes.cli`: `main(argv=None)`, the `lnnodes` command.

## Limitations

The HTTP side is deliberately minimal, not a general web server:

- Connections are handled one at a time.
- Only the first 1024 bytes of a request are read.
- Requests are matched by prefix only. Headers, methods other than `GET` and
  other query parameters are not interpreted.
- Replies carry no `Content-Length` header, and the connection is closed after
  each reply.

The background updater does not restart after an error. Once it stops, the
database keeps its last contents until the service is restarted.

## Tests

The test suite uses pytest. Install the `test` extra to get it:

    pip install -e ".[test]"
    pytest